# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ..config import VS_VERSION_INPUT, VSWHERE_PATH_INPUT, DiscoveryQuery
from ..pipeline import configure_environment, default_exporter, inspect_installation
from .shared import build_cli_logger, configure_logging, render_changes, reported_failures

app = typer.Typer(
    help="Configure the MSVC developer environment for later build steps.",
    add_completion=False,
    no_args_is_help=True,
)

VsVersionOption = Annotated[
    str,
    typer.Option(
        "--vs-version",
        envvar=VS_VERSION_INPUT,
        help="Version range passed to vswhere, or 'latest'.",
    ),
]
VswherePathOption = Annotated[
    str | None,
    typer.Option(
        "--vswhere-path",
        envvar=VSWHERE_PATH_INPUT,
        help="Directory containing vswhere.exe.",
    ),
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show diagnostic output.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")]


@app.command("setup")
def setup_command(
    vs_version: VsVersionOption = "latest",
    vswhere_path: VswherePathOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the variables that would change without exporting them."),
    ] = False,
    debug: DebugOption = False,
    emoji: EmojiOption = True,
) -> None:
    """Export the variables set by vcvarsall.bat for x64."""

    logger = build_cli_logger(emoji=emoji, debug=debug)
    configure_logging(debug=debug)
    with reported_failures(logger):
        query = DiscoveryQuery.from_inputs(vs_version, vswhere_path)
        logger.debug(f"vs-version={query.requested_version} vswhere-path={query.override_path or '-'}")
        exporter = None if dry_run else default_exporter()
        changes = configure_environment(query, exporter=exporter)

    if dry_run:
        render_changes(logger.console, changes)
        return
    logger.ok(f"Exported {len(changes)} environment variable(s)")


@app.command("locate")
def locate_command(
    vs_version: VsVersionOption = "latest",
    vswhere_path: VswherePathOption = None,
    debug: DebugOption = False,
    emoji: EmojiOption = True,
) -> None:
    """Show which vswhere and Visual Studio installation would be used."""

    logger = build_cli_logger(emoji=emoji, debug=debug)
    configure_logging(debug=debug)
    with reported_failures(logger):
        query = DiscoveryQuery.from_inputs(vs_version, vswhere_path)
        report = inspect_installation(query)

    table = Table(title="Visual Studio", box=box.SIMPLE, expand=True)
    table.add_column("Item", style="bold")
    table.add_column("Path", overflow="fold")
    table.add_row("vswhere", str(report.vswhere_path))
    table.add_row("installation", str(report.installation.root))
    table.add_row("vcvarsall", str(report.installation.vcvars_path))
    logger.console.print(table)


def main() -> None:
    """Run the Typer application."""

    app()


__all__ = ["app", "main"]
