# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub Actions workflow command helpers."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Final, TextIO

GITHUB_ACTIONS_ENV: Final[str] = "GITHUB_ACTIONS"
GITHUB_ENV_FILE: Final[str] = "GITHUB_ENV"
DELIMITER_PREFIX: Final[str] = "ghadelimiter_"


def running_in_actions(environ: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when executing inside a GitHub Actions job."""

    env = os.environ if environ is None else environ
    return env.get(GITHUB_ACTIONS_ENV, "").lower() == "true"


def escape_data(value: str) -> str:
    """Escape a workflow command message."""

    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""

    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(command: str, message: str = "", properties: Mapping[str, str] | None = None) -> str:
    """Render ``::command key=value::message``.

    Args:
        command: Workflow command name such as ``error`` or ``set-env``.
        message: Command payload.
        properties: Optional command properties.

    Returns:
        str: Single-line workflow command.
    """

    rendered = f"::{command}"
    if properties:
        joined = ",".join(f"{key}={escape_property(value)}" for key, value in properties.items() if value)
        if joined:
            rendered = f"{rendered} {joined}"
    return f"{rendered}::{escape_data(message)}"


def issue_command(
    command: str,
    message: str = "",
    properties: Mapping[str, str] | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Write a workflow command to ``stream`` (stdout by default)."""

    target = sys.stdout if stream is None else stream
    target.write(format_command(command, message, properties) + "\n")
    target.flush()


def format_key_value(name: str, value: str, *, delimiter: str | None = None) -> str:
    """Render a heredoc style record for an environment file command.

    Args:
        name: Variable name.
        value: Variable value, which may span lines.
        delimiter: Explicit delimiter; a random one is generated when omitted.

    Returns:
        str: Record terminated by its delimiter, without a trailing newline.

    Raises:
        ValueError: If the name or value contains the delimiter.
    """

    marker = delimiter or f"{DELIMITER_PREFIX}{uuid.uuid4()}"
    if marker in name:
        raise ValueError(f"Unexpected input: name should not contain the delimiter {marker!r}")
    if marker in value:
        raise ValueError(f"Unexpected input: value should not contain the delimiter {marker!r}")
    return f"{name}<<{marker}\n{value}\n{marker}"


def append_file_command(path: Path, record: str) -> None:
    """Append ``record`` to the runner-provided command file at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Missing file at path: {path}")
    with path.open("a", encoding="utf-8") as handle:
        handle.write(f"{record}\n")


class WorkflowCommandHandler(logging.Handler):
    """Render log records as ``debug``/``warning``/``error`` workflow commands."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialise the handler.

        Args:
            stream: Destination for workflow commands. ``None`` resolves
                ``sys.stdout`` at emit time.
        """

        super().__init__()
        self._stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        """Issue ``record`` as the workflow command matching its level.

        Args:
            record: Log record to render.
        """

        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                command = "error"
            elif record.levelno >= logging.WARNING:
                command = "warning"
            elif record.levelno >= logging.INFO:
                command = "notice"
            else:
                command = "debug"
            issue_command(command, message, stream=self._stream)
        except Exception:  # pragma: no cover
            self.handleError(record)


__all__ = [
    "GITHUB_ENV_FILE",
    "WorkflowCommandHandler",
    "append_file_command",
    "escape_data",
    "escape_property",
    "format_command",
    "format_key_value",
    "issue_command",
    "running_in_actions",
]
