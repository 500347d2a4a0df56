# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Export environment changes to the current job."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO

from .workflow import GITHUB_ENV_FILE, append_file_command, format_key_value, issue_command

LOGGER = logging.getLogger(__name__)


class Exporter(Protocol):
    """Sink applying an environment diff."""

    def apply(self, changes: Mapping[str, str]) -> None:
        """Export every entry in ``changes``."""
        ...


@dataclass(slots=True)
class WorkflowExporter:
    """Export variables the way ``core.exportVariable`` does in GitHub Actions.

    Each variable is registered for later steps through the ``GITHUB_ENV``
    file when the runner provides one, otherwise through the ``set-env``
    workflow command. Once registered it is also set on ``environ`` so later
    code in this process sees it.
    """

    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    env_file: Path | None = None
    stream: TextIO | None = None

    @classmethod
    def from_environment(cls, environ: MutableMapping[str, str] | None = None) -> WorkflowExporter:
        """Return an exporter bound to ``environ`` and its ``GITHUB_ENV`` file."""

        env = os.environ if environ is None else environ
        env_file = env.get(GITHUB_ENV_FILE)
        return cls(environ=env, env_file=Path(env_file) if env_file else None)

    def export_variable(self, name: str, value: str) -> None:
        """Export a single variable.

        Args:
            name: Variable name.
            value: Variable value.

        Raises:
            FileNotFoundError: If the ``GITHUB_ENV`` file is missing. ``environ``
                is left untouched.
        """

        if self.env_file is not None:
            append_file_command(self.env_file, format_key_value(name, value))
        else:
            issue_command("set-env", value, {"name": name}, stream=self.stream)
        self.environ[name] = value
        LOGGER.debug("Exported %s", name)

    def apply(self, changes: Mapping[str, str]) -> None:
        """Export every entry in ``changes`` in iteration order.

        The ``GITHUB_ENV`` file is checked before anything is exported so a
        missing file fails the run without a partial export.

        Args:
            changes: Variables to export.

        Raises:
            FileNotFoundError: If the ``GITHUB_ENV`` file is missing.
        """

        if self.env_file is not None and not self.env_file.is_file():
            raise FileNotFoundError(f"Missing file at path: {self.env_file}")
        for name, value in changes.items():
            self.export_variable(name, value)


__all__ = ["Exporter", "WorkflowExporter"]
