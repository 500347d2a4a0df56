# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse captured environment listings and diff them against the process."""

from __future__ import annotations

import codecs
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Final

BLOCK_ENCODING: Final[str] = "utf-16-le"
LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r?\n")


def decode_block(block: bytes) -> str:
    """Decode a ``cmd /u`` listing, dropping a leading byte order mark."""

    if block.startswith(codecs.BOM_UTF16_LE):
        block = block[len(codecs.BOM_UTF16_LE) :]
    return block.decode(BLOCK_ENCODING, errors="replace")


def _split_assignment(line: str) -> tuple[str, str] | None:
    name, separator, value = line.partition("=")
    if not separator or not name:
        return None
    return name, value


def _assignments(lines: Iterable[str]) -> Iterable[tuple[str, str]]:
    for line in lines:
        pair = _split_assignment(line)
        if pair is not None:
            yield pair


def parse_lines(text: str) -> Mapping[str, str]:
    """Fold ``NAME=VALUE`` lines into a read-only mapping.

    Only ``\r\n`` and ``\n`` end a line; other Unicode line separators stay
    part of the value. Lines without ``=`` are skipped and the last assignment
    of a name wins.

    Args:
        text: Decoded listing text.

    Returns:
        Mapping[str, str]: Variable names mapped to their final values.
    """

    return MappingProxyType(dict(_assignments(LINE_BREAK.split(text.rstrip()))))


def parse_environment_block(block: bytes) -> Mapping[str, str]:
    """Decode and parse the UTF-16-LE environment listing.

    Args:
        block: Raw bytes captured from the shell.

    Returns:
        Mapping[str, str]: Parsed environment.
    """

    return parse_lines(decode_block(block))


def diff_environment(new: Mapping[str, str], ambient: Mapping[str, str]) -> Mapping[str, str]:
    """Return entries of ``new`` that are absent from or differ in ``ambient``.

    Variables only present in ``ambient`` are not reported; the diff never
    removes anything.

    Args:
        new: Environment captured after running the init script.
        ambient: Environment of the current process.

    Returns:
        Mapping[str, str]: Read-only mapping of variables to export.
    """

    changed = {name: value for name, value in new.items() if ambient.get(name) != value}
    return MappingProxyType(changed)


__all__ = [
    "BLOCK_ENCODING",
    "decode_block",
    "diff_environment",
    "parse_environment_block",
    "parse_lines",
]
