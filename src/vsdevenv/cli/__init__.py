# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for vsdevenv.

The Typer application lives in :mod:`vsdevenv.cli.app`. It is not re-exported
here so that ``vsdevenv.cli.app`` always names the module.
"""

from __future__ import annotations

__all__: list[str] = []
