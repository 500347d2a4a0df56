# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Blocking subprocess execution with streamed output listeners."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; commands are assembled from fixed
# tool locations and never run through ``shell=True``.
import subprocess  # nosec B404
import sys
import tempfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Final, Protocol

from .errors import CommandLaunchError

LOGGER = logging.getLogger(__name__)

OutputListener = Callable[[bytes], None]
Command = Sequence[str] | str

CHUNK_SIZE: Final[int] = 64 * 1024


@dataclass(slots=True, frozen=True)
class StreamListeners:
    """Callbacks receiving raw output from a running subprocess."""

    stdout: OutputListener | None = None
    stderr: OutputListener | None = None


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    silent: bool = False


class CommandRunner(Protocol):
    """Callable contract satisfied by :func:`run_streaming` and test doubles."""

    def __call__(
        self,
        command: Command,
        *,
        listeners: StreamListeners | None = None,
        options: CommandOptions | None = None,
    ) -> int:
        """Run ``command`` to completion and return its exit status."""
        ...


def _normalize_command(command: Command) -> Command:
    """Normalise the subprocess command.

    Command lines supplied as a single string are passed through untouched so
    that Windows receives them verbatim.

    Args:
        command: Raw command sequence or command line supplied by the caller.

    Returns:
        Command: Validated command suitable for :class:`subprocess.Popen`.

    Raises:
        ValueError: If the command is empty.
        CommandLaunchError: If a bare executable name cannot be found on ``PATH``.
    """

    if isinstance(command, str):
        if not command.strip():
            raise ValueError("subprocess command line must not be blank")
        return command
    if not command:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = command
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise CommandLaunchError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def _render(command: Command) -> str:
    if isinstance(command, str):
        return command
    return subprocess.list2cmdline(list(command))


def _echo(chunk: bytes) -> None:
    sys.stdout.write(chunk.decode(errors="replace"))
    sys.stdout.flush()


def run_streaming(
    command: Command,
    *,
    listeners: StreamListeners | None = None,
    options: CommandOptions | None = None,
) -> int:
    """Run ``command`` to completion while streaming its output to listeners.

    The stdout listener is invoked synchronously for each chunk in the order
    the child emits it. stderr is spooled to a temporary file and handed to the
    stderr listener in one piece after the child exits.

    Args:
        command: Command sequence, or a complete command line string.
        listeners: Optional callbacks receiving stdout and stderr bytes.
        options: Execution options; ``silent`` suppresses the command echo and
            the pass-through of stdout to the console.

    Returns:
        int: Exit status reported by the subprocess.

    Raises:
        CommandLaunchError: If the executable cannot be started.
        ValueError: If ``command`` is empty.
    """

    resolved_options = options or CommandOptions()
    resolved_listeners = listeners or StreamListeners()
    normalized = _normalize_command(command)

    if not resolved_options.silent:
        sys.stdout.write(f"[command]{_render(normalized)}\n")
    LOGGER.debug("Running %s", _render(normalized))

    with tempfile.TemporaryFile() as stderr_sink:
        try:
            # Bandit: arguments come from resolved tool paths, not user input.
            process = subprocess.Popen(  # nosec B603
                normalized,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=stderr_sink,
            )
        except OSError as exc:
            raise CommandLaunchError(f"Unable to start '{_render(normalized)}': {exc}") from exc

        with process:
            stdout = process.stdout
            if stdout is not None:
                for chunk in iter(partial(stdout.read1, CHUNK_SIZE), b""):
                    if resolved_listeners.stdout is not None:
                        resolved_listeners.stdout(chunk)
                    if not resolved_options.silent:
                        _echo(chunk)
            returncode = process.wait()

        stderr_sink.seek(0)
        captured_stderr = stderr_sink.read()

    if captured_stderr:
        if resolved_listeners.stderr is not None:
            resolved_listeners.stderr(captured_stderr)
        if not resolved_options.silent:
            sys.stderr.write(captured_stderr.decode(errors="replace"))
    LOGGER.debug("Command exited with status %d", returncode)
    return returncode


__all__ = [
    "Command",
    "CommandOptions",
    "CommandRunner",
    "OutputListener",
    "StreamListeners",
    "run_streaming",
]
