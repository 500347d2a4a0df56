# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy for the environment setup pipeline."""

from __future__ import annotations


class SetupError(RuntimeError):
    """Base class for failures that abort the setup pipeline."""


class PlatformUnsupportedError(SetupError):
    """Raised when the pipeline is started outside Windows."""


class ToolNotFoundError(SetupError):
    """Raised when ``vswhere.exe`` does not exist at the resolved location."""


class NoInstallationError(SetupError):
    """Raised when vswhere ran successfully but reported no installation."""


class ScriptMissingError(SetupError):
    """Raised when an installation lacks ``vcvarsall.bat``."""


class ExecFailedError(SetupError):
    """Raised when a subprocess fails or produces unusable output."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        """Initialise the error with the captured diagnostic stream.

        Args:
            message: Human-readable error message shown to the user.
            stderr: Standard error text captured from the failing subprocess.
        """

        super().__init__(message)
        self.stderr = stderr


class ParseEmptyError(ExecFailedError):
    """Raised when the init script ran but no variables could be parsed."""


class CommandLaunchError(ExecFailedError):
    """Raised when an executable cannot be started at all."""


__all__ = [
    "CommandLaunchError",
    "ExecFailedError",
    "NoInstallationError",
    "ParseEmptyError",
    "PlatformUnsupportedError",
    "ScriptMissingError",
    "SetupError",
    "ToolNotFoundError",
]
