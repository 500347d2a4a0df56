# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate ``vswhere.exe`` using an ordered fallback chain."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from .config import DiscoveryQuery

LOGGER = logging.getLogger(__name__)

VSWHERE_NAME: Final[str] = "vswhere"
VSWHERE_EXE: Final[str] = "vswhere.exe"
PROGRAM_FILES_X86_ENV: Final[str] = "ProgramFiles(x86)"
DEFAULT_PROGRAM_FILES_X86: Final[str] = "C:\\Program Files (x86)"
INSTALLER_SUFFIX: Final[tuple[str, ...]] = ("Microsoft Visual Studio", "Installer", VSWHERE_EXE)


def _lookup(environ: Mapping[str, str], name: str) -> str | None:
    """Return ``environ[name]`` ignoring case, as Windows does."""

    value = environ.get(name)
    if value is not None:
        return value
    folded = name.casefold()
    for key, candidate in environ.items():
        if key.casefold() == folded:
            return candidate
    return None


def fallback_vswhere_path(environ: Mapping[str, str]) -> Path:
    """Return the location the Visual Studio installer places ``vswhere.exe``.

    Args:
        environ: Environment mapping providing ``ProgramFiles(x86)``.

    Returns:
        Path: Conventional installer path; it is not checked for existence.
    """

    program_files = _lookup(environ, PROGRAM_FILES_X86_ENV) or DEFAULT_PROGRAM_FILES_X86
    return Path(program_files).joinpath(*INSTALLER_SUFFIX)


def locate_vswhere(query: DiscoveryQuery, *, environ: Mapping[str, str] | None = None) -> Path:
    """Resolve the path to ``vswhere.exe``.

    The first strategy that yields a candidate wins: an explicit override
    directory, then the executable search path, then the installer's fixed
    location. Only the search path lookup verifies existence.

    Args:
        query: Discovery settings carrying the optional override directory.
        environ: Environment used for ``PATH`` and ``ProgramFiles(x86)``.

    Returns:
        Path: Candidate location of ``vswhere.exe``.
    """

    env = os.environ if environ is None else environ

    if query.override_path is not None:
        LOGGER.debug("Using given vswhere-path: %s", query.override_path)
        return query.override_path / VSWHERE_EXE

    found = shutil.which(VSWHERE_NAME, path=_lookup(env, "PATH"))
    if found is not None:
        LOGGER.debug("Found tool in PATH: %s", found)
        return Path(found).resolve()

    candidate = fallback_vswhere_path(env)
    LOGGER.debug("Trying Visual Studio-installed path: %s", candidate)
    return candidate


__all__ = [
    "VSWHERE_EXE",
    "fallback_vswhere_path",
    "locate_vswhere",
]
