# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Entry points chaining discovery, invocation, diffing and export."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .config import DiscoveryQuery
from .environment import diff_environment, parse_environment_block
from .errors import ParseEmptyError, PlatformUnsupportedError
from .exporter import Exporter, WorkflowExporter
from .invoker import TARGET_ARCH, invoke_vcvars, vcvars_failure
from .locator import locate_vswhere
from .process import CommandRunner, run_streaming
from .resolver import Installation, resolve_installation

LOGGER = logging.getLogger(__name__)

SUPPORTED_PLATFORM: Final[str] = "win32"


@dataclass(slots=True, frozen=True)
class InstallationReport:
    """Outcome of the discovery stages."""

    vswhere_path: Path
    installation: Installation


def ensure_supported_platform(platform_name: str | None = None) -> None:
    """Refuse to continue on anything other than Windows.

    Raises:
        PlatformUnsupportedError: If ``platform_name`` is not ``win32``.
    """

    current = sys.platform if platform_name is None else platform_name
    if current != SUPPORTED_PLATFORM:
        raise PlatformUnsupportedError("vsdevenv can only be run on Windows runners")


def inspect_installation(
    query: DiscoveryQuery,
    *,
    environ: Mapping[str, str] | None = None,
    platform_name: str | None = None,
    runner: CommandRunner = run_streaming,
) -> InstallationReport:
    """Locate vswhere and resolve the installation it reports.

    Args:
        query: Discovery settings.
        environ: Environment consulted for tool lookup.
        platform_name: Platform override, ``sys.platform`` when omitted.
        runner: Process primitive used for subprocesses.

    Returns:
        InstallationReport: Resolved vswhere location and installation.
    """

    ensure_supported_platform(platform_name)
    vswhere_path = locate_vswhere(query, environ=environ)
    installation = resolve_installation(vswhere_path, query, runner=runner)
    return InstallationReport(vswhere_path=vswhere_path, installation=installation)


def configure_environment(
    query: DiscoveryQuery,
    *,
    environ: Mapping[str, str] | None = None,
    platform_name: str | None = None,
    runner: CommandRunner = run_streaming,
    exporter: Exporter | None = None,
) -> Mapping[str, str]:
    """Configure the MSVC developer environment for the current job.

    Nothing is exported until every stage has succeeded.

    Args:
        query: Discovery settings.
        environ: Baseline environment, ``os.environ`` when omitted.
        platform_name: Platform override, ``sys.platform`` when omitted.
        runner: Process primitive used for subprocesses.
        exporter: Sink for the diff; ``None`` computes the diff without exporting.

    Returns:
        Mapping[str, str]: Variables that were (or would be) exported.

    Raises:
        SetupError: Subclasses describe which stage failed.
    """

    ambient = os.environ if environ is None else environ
    report = inspect_installation(query, environ=ambient, platform_name=platform_name, runner=runner)

    block = invoke_vcvars(report.installation.vcvars_path, TARGET_ARCH, runner=runner)
    captured = parse_environment_block(block.data)
    if not captured:
        raise ParseEmptyError(vcvars_failure(block.stderr), stderr=block.stderr)
    LOGGER.debug("Parsed %d variables from vcvarsall.bat", len(captured))

    changes = diff_environment(captured, ambient)
    LOGGER.debug("%d variables differ from the current environment", len(changes))
    if exporter is not None:
        exporter.apply(changes)
    return changes


def default_exporter() -> Exporter:
    """Return the exporter bound to ``os.environ`` and the runner's ``GITHUB_ENV``.

    Returns:
        Exporter: Exporter used by ``vsdevenv setup`` outside dry runs.
    """

    return WorkflowExporter.from_environment()


__all__ = [
    "InstallationReport",
    "configure_environment",
    "default_exporter",
    "ensure_supported_platform",
    "inspect_installation",
]
