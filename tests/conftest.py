# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from vsdevenv.process import Command, CommandOptions, StreamListeners

ScriptedResult = tuple[int, bytes, bytes]


@dataclass(slots=True)
class RunnerCall:
    command: Command
    options: CommandOptions | None


@dataclass(slots=True)
class ScriptedRunner:
    """Replay canned ``(exit_code, stdout, stderr)`` results in call order."""

    results: Sequence[ScriptedResult]
    calls: list[RunnerCall] = field(default_factory=list)

    def __call__(
        self,
        command: Command,
        *,
        listeners: StreamListeners | None = None,
        options: CommandOptions | None = None,
    ) -> int:
        self.calls.append(RunnerCall(command=command, options=options))
        exit_code, stdout, stderr = self.results[len(self.calls) - 1]
        if listeners is not None:
            if stdout and listeners.stdout is not None:
                listeners.stdout(stdout)
            if stderr and listeners.stderr is not None:
                listeners.stderr(stderr)
        return exit_code


@pytest.fixture
def scripted_runner() -> Callable[[Sequence[ScriptedResult]], ScriptedRunner]:
    """Return a factory building scripted process runners."""
    return ScriptedRunner


@pytest.fixture
def vs_install(tmp_path: Path) -> Path:
    """Create a fake Visual Studio installation containing vcvarsall.bat."""
    root = tmp_path / "Microsoft Visual Studio" / "2022" / "Enterprise"
    script = root / "VC" / "Auxiliary" / "Build" / "vcvarsall.bat"
    script.parent.mkdir(parents=True)
    script.write_text("@echo off\n", encoding="utf-8")
    return root


@pytest.fixture
def vswhere_dir(tmp_path: Path) -> Path:
    """Create a directory holding a placeholder vswhere.exe."""
    directory = tmp_path / "vswhere"
    directory.mkdir()
    (directory / "vswhere.exe").write_bytes(b"MZ")
    return directory
