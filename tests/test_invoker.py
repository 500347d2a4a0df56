# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for running vcvarsall.bat through cmd."""

from __future__ import annotations

from pathlib import Path

import pytest

from vsdevenv.errors import ExecFailedError
from vsdevenv.invoker import build_vcvars_command, invoke_vcvars


def test_command_chains_environment_dump_after_script() -> None:
    command = build_vcvars_command(Path("C:\\VS\\VC\\Auxiliary\\Build\\vcvarsall.bat"))

    assert command == 'cmd /u /c "C:\\VS\\VC\\Auxiliary\\Build\\vcvarsall.bat" x64 >nul && set'


def test_invoke_captures_block_silently(scripted_runner) -> None:
    block = "INCLUDE=C:\\inc\r\n".encode("utf-16-le")
    runner = scripted_runner([(0, block, b"")])

    result = invoke_vcvars(Path("vcvarsall.bat"), runner=runner)

    assert result.data == block
    assert result.stderr == ""
    (call,) = runner.calls
    assert isinstance(call.command, str)
    assert call.options is not None and call.options.silent


def test_invoke_failure_carries_stderr(scripted_runner) -> None:
    runner = scripted_runner([(1, b"", b"ERROR: Cannot determine the location of the VS Common Tools folder.")])

    with pytest.raises(ExecFailedError) as excinfo:
        invoke_vcvars(Path("vcvarsall.bat"), runner=runner)

    assert "Could not call vcvarsall.bat or parse environment" in str(excinfo.value)
    assert "VS Common Tools" in excinfo.value.stderr
