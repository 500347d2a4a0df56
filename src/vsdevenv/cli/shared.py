# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, rendering)."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from ..errors import ExecFailedError, SetupError
from ..logging import fail as core_fail
from ..logging import ok as core_ok
from ..workflow import WorkflowCommandHandler, issue_command, running_in_actions

PACKAGE_LOGGER = "vsdevenv"


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings.

    Inside GitHub Actions failures are reported as ``::error::`` workflow
    commands so the runner annotates the job.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    workflow: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences.

        Args:
            message: Text describing the failure state.
        """

        if self.workflow:
            issue_command("error", message)
            return
        core_fail(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences.

        Args:
            message: Text describing the successful state.
        """

        core_ok(message, use_emoji=self.use_emoji)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload rendered with simple highlighting.
        """

        if not self.debug_enabled:
            return
        if self.workflow:
            issue_command("debug", message)
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            text.append(raw_value, style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def build_cli_logger(
    *,
    emoji: bool,
    debug: bool = False,
    no_color: bool = False,
    environ: Mapping[str, str] | None = None,
) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided preferences.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.
        environ: Environment used to detect GitHub Actions.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, highlight=False)
    return CLILogger(
        console=console,
        use_emoji=emoji,
        debug_enabled=debug,
        workflow=running_in_actions(environ),
    )


def configure_logging(*, debug: bool, environ: Mapping[str, str] | None = None) -> logging.Handler:
    """Route package log records to the runner or a Rich handler.

    Args:
        debug: Whether debug records should be shown outside GitHub Actions.
        environ: Environment used to detect GitHub Actions.

    Returns:
        logging.Handler: Handler attached to the package logger.
    """

    handler: logging.Handler
    if running_in_actions(environ):
        handler = WorkflowCommandHandler()
        level = logging.DEBUG
    else:
        handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        level = logging.DEBUG if debug else logging.WARNING
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler


@contextmanager
def reported_failures(logger: CLILogger) -> Iterator[None]:
    """Turn any failure inside the block into one message and exit status 1.

    Raises:
        typer.Exit: When the wrapped block raises.
    """

    try:
        yield
    except SetupError as exc:
        logger.fail(str(exc))
        if isinstance(exc, ExecFailedError) and exc.stderr:
            logger.debug(f"stderr={exc.stderr.strip()!r}")
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.fail(str(exc) or exc.__class__.__name__)
        raise typer.Exit(code=1) from exc


def render_changes(console: Console, changes: Mapping[str, str]) -> None:
    """Print the environment diff as a table.

    Args:
        console: Console receiving the table.
        changes: Variables that differ from the current environment.
    """

    table = Table(title="Environment Changes", box=box.SIMPLE, expand=True)
    table.add_column("Variable", style="bold")
    table.add_column("Value", overflow="fold")
    for name in sorted(changes, key=str.casefold):
        table.add_row(name, changes[name])
    console.print(table)


__all__ = [
    "CLILogger",
    "build_cli_logger",
    "configure_logging",
    "render_changes",
    "reported_failures",
]
