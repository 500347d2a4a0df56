# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the Visual Studio installation reported by ``vswhere``."""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .config import DiscoveryQuery
from .errors import ExecFailedError, NoInstallationError, ScriptMissingError, ToolNotFoundError
from .process import CommandOptions, CommandRunner, StreamListeners, run_streaming

LOGGER = logging.getLogger(__name__)

VC_TOOLS_COMPONENT: Final[str] = "Microsoft.VisualStudio.Component.VC.Tools.x86.x64"
VCVARS_RELATIVE: Final[tuple[str, ...]] = ("VC", "Auxiliary", "Build", "vcvarsall.bat")
NO_INSTALLATION_MESSAGE: Final[str] = "Could not locate suitable Visual Studio installation."


@dataclass(slots=True, frozen=True)
class Installation:
    """Visual Studio installation with a verified ``vcvarsall.bat``."""

    root: Path
    vcvars_path: Path


def build_vswhere_args(query: DiscoveryQuery) -> list[str]:
    """Return the vswhere arguments selecting the newest C++ capable install.

    Args:
        query: Discovery settings providing the requested version range.

    Returns:
        list[str]: Argument list excluding the executable itself.
    """

    args = [
        "-latest",
        "-requires",
        VC_TOOLS_COMPONENT,
        "-property",
        "installationPath",
        "-products",
        "*",
    ]
    if not query.wants_latest:
        args.extend(["-version", query.requested_version])
    return args


def vcvars_path_for(root: Path) -> Path:
    """Return the expected ``vcvarsall.bat`` location below ``root``."""

    return root.joinpath(*VCVARS_RELATIVE)


def decode_tool_output(raw: bytes) -> str:
    """Decode vswhere output, preferring UTF-8 over the active code page.

    vswhere writes UTF-8 when asked to and the console code page otherwise, so
    output that is not valid UTF-8 is decoded with the preferred locale
    encoding.

    Args:
        raw: Bytes captured from vswhere stdout.

    Returns:
        str: Decoded text.
    """

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode(locale.getpreferredencoding(False), errors="replace")


def _first_line(text: str) -> str:
    """Return the first non-blank line of ``text`` without surrounding whitespace."""

    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def resolve_installation(
    tool_path: Path,
    query: DiscoveryQuery,
    *,
    runner: CommandRunner = run_streaming,
) -> Installation:
    """Run vswhere and return the installation it reports.

    Every check runs once the subprocess has exited so that exactly one
    failure is reported per run.

    Args:
        tool_path: Location of ``vswhere.exe``.
        query: Discovery settings for the vswhere query.
        runner: Process primitive used to execute vswhere.

    Returns:
        Installation: Installation root and its ``vcvarsall.bat`` path.

    Raises:
        ToolNotFoundError: If ``tool_path`` does not exist.
        ExecFailedError: If vswhere exits with a non-zero status.
        NoInstallationError: If vswhere reports no installation.
        ScriptMissingError: If the installation has no ``vcvarsall.bat``.
    """

    if not tool_path.exists():
        raise ToolNotFoundError(f"vsdevenv requires the path to where vswhere.exe exists: {tool_path}")
    LOGGER.debug("Full tool exe: %s", tool_path)

    args = build_vswhere_args(query)
    LOGGER.debug("Execution arguments: %s", " ".join(args))

    captured = bytearray()
    stderr = bytearray()
    exit_code = runner(
        [str(tool_path), *args],
        listeners=StreamListeners(stdout=captured.extend, stderr=stderr.extend),
        options=CommandOptions(silent=False),
    )
    if exit_code != 0:
        raise ExecFailedError(
            f"{NO_INSTALLATION_MESSAGE} vswhere exited with status {exit_code}",
            stderr=stderr.decode(errors="replace"),
        )

    installation_path = _first_line(decode_tool_output(bytes(captured)))
    if not installation_path:
        raise NoInstallationError(NO_INSTALLATION_MESSAGE)
    LOGGER.debug("Found VS installation path: %s", installation_path)

    root = Path(installation_path)
    vcvars_path = vcvars_path_for(root)
    LOGGER.debug("Checking for path: %s", vcvars_path)
    if not vcvars_path.is_file():
        raise ScriptMissingError(f"Unable to locate vcvarsall.bat: {vcvars_path} does not exist")
    return Installation(root=root, vcvars_path=vcvars_path)


__all__ = [
    "Installation",
    "NO_INSTALLATION_MESSAGE",
    "VC_TOOLS_COMPONENT",
    "build_vswhere_args",
    "decode_tool_output",
    "resolve_installation",
    "vcvars_path_for",
]
