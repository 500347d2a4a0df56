# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the streaming subprocess primitive."""

from __future__ import annotations

import dataclasses
import sys

import pytest

from vsdevenv.errors import CommandLaunchError
from vsdevenv.process import CommandOptions, StreamListeners, run_streaming

SILENT = CommandOptions(silent=True)


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def test_stdout_chunks_reach_listener() -> None:
    chunks: list[bytes] = []

    exit_code = run_streaming(
        _python("import sys; sys.stdout.write('first\\nsecond\\n')"),
        listeners=StreamListeners(stdout=chunks.append),
        options=SILENT,
    )

    assert exit_code == 0
    assert b"".join(chunks).splitlines() == [b"first", b"second"]


def test_stderr_is_delivered_separately_with_exit_code() -> None:
    stdout: list[bytes] = []
    stderr: list[bytes] = []

    exit_code = run_streaming(
        _python("import sys; print('out'); sys.stderr.write('broken'); sys.exit(3)"),
        listeners=StreamListeners(stdout=stdout.append, stderr=stderr.append),
        options=SILENT,
    )

    assert exit_code == 3
    assert b"".join(stdout).strip() == b"out"
    assert b"".join(stderr) == b"broken"


def test_non_silent_run_echoes_command_and_output(capsys) -> None:
    run_streaming(_python("print('visible')"))

    captured = capsys.readouterr().out
    assert captured.startswith("[command]")
    assert "visible" in captured


def test_silent_run_prints_nothing(capsys) -> None:
    run_streaming(_python("print('hidden')"), options=SILENT)

    assert capsys.readouterr().out == ""


def test_unknown_executable_is_reported() -> None:
    with pytest.raises(CommandLaunchError):
        run_streaming(["definitely-not-a-real-vswhere-binary"], options=SILENT)


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_streaming([], options=SILENT)


def test_command_options_only_control_echo() -> None:
    assert [field.name for field in dataclasses.fields(CommandOptions)] == ["silent"]
    assert CommandOptions().silent is False
