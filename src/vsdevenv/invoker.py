# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run ``vcvarsall.bat`` and capture the environment it produces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ExecFailedError
from .process import CommandOptions, CommandRunner, StreamListeners, run_streaming

LOGGER = logging.getLogger(__name__)

TARGET_ARCH: Final[str] = "x64"
SHELL: Final[str] = "cmd"
VCVARS_FAILURE_MESSAGE: Final[str] = "Could not call vcvarsall.bat or parse environment"


@dataclass(slots=True, frozen=True)
class EnvironmentBlock:
    """Raw ``set`` listing emitted by a ``cmd /u`` shell."""

    data: bytes
    stderr: str = ""


def build_vcvars_command(script_path: Path, arch: str = TARGET_ARCH) -> str:
    """Return the command line that runs ``script_path`` then dumps the environment.

    ``set`` only runs when the script succeeds. The script's own output is
    discarded so that stdout carries nothing but the listing.
    """

    return f'{SHELL} /u /c "{script_path}" {arch} >nul && set'


def vcvars_failure(stderr: str) -> str:
    """Return the failure message for a ``vcvarsall.bat`` run.

    Args:
        stderr: Captured stderr of the failed run.

    Returns:
        str: Message naming the failure followed by the captured stderr.
    """

    return f"{VCVARS_FAILURE_MESSAGE}: {stderr}"


def invoke_vcvars(
    script_path: Path,
    arch: str = TARGET_ARCH,
    *,
    runner: CommandRunner = run_streaming,
) -> EnvironmentBlock:
    """Execute ``vcvarsall.bat`` for ``arch`` and capture the resulting listing.

    Args:
        script_path: Path to ``vcvarsall.bat``.
        arch: Target architecture token understood by the script.
        runner: Process primitive used to execute the shell.

    Returns:
        EnvironmentBlock: UTF-16-LE encoded ``set`` output plus captured stderr.

    Raises:
        ExecFailedError: If the shell exits with a non-zero status.
    """

    stdout = bytearray()
    stderr = bytearray()
    command = build_vcvars_command(script_path, arch)
    LOGGER.debug("Invoking %s", command)
    exit_code = runner(
        command,
        listeners=StreamListeners(stdout=stdout.extend, stderr=stderr.extend),
        options=CommandOptions(silent=True),
    )
    stderr_text = stderr.decode(errors="replace")
    if exit_code != 0:
        raise ExecFailedError(vcvars_failure(stderr_text), stderr=stderr_text)
    return EnvironmentBlock(data=bytes(stdout), stderr=stderr_text)


__all__ = [
    "EnvironmentBlock",
    "TARGET_ARCH",
    "build_vcvars_command",
    "invoke_vcvars",
    "vcvars_failure",
]
