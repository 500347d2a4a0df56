# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run configuration for Visual Studio discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

LATEST_VERSION: Final[str] = "latest"
VS_VERSION_INPUT: Final[str] = "INPUT_VS-VERSION"
VSWHERE_PATH_INPUT: Final[str] = "INPUT_VSWHERE-PATH"


class DiscoveryQuery(BaseModel):
    """Describe which Visual Studio installation should be configured.

    Attributes:
        requested_version: Version range passed to ``vswhere -version`` or
            ``"latest"`` to accept the newest installation.
        override_path: Directory containing ``vswhere.exe`` that bypasses the
            usual lookup when provided.
    """

    model_config = ConfigDict(frozen=True)

    requested_version: str = LATEST_VERSION
    override_path: Path | None = None

    @field_validator("requested_version", mode="before")
    @classmethod
    def _normalise_version(cls, value: object) -> object:
        """Map blank version inputs onto ``"latest"``.

        Args:
            value: Raw version value supplied by the caller.

        Returns:
            object: Stripped version string, or the latest sentinel when blank.
        """

        if value is None:
            return LATEST_VERSION
        if isinstance(value, str):
            return value.strip() or LATEST_VERSION
        return value

    @field_validator("override_path", mode="before")
    @classmethod
    def _normalise_override(cls, value: object) -> object:
        """Treat blank override inputs as unset.

        Args:
            value: Raw override path supplied by the caller.

        Returns:
            object: ``None`` for blank strings, otherwise the original value.
        """

        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def wants_latest(self) -> bool:
        """Return ``True`` when no explicit version range was requested."""

        return self.requested_version == LATEST_VERSION

    @classmethod
    def from_inputs(cls, vs_version: str | None, vswhere_path: str | Path | None) -> DiscoveryQuery:
        """Build a query from raw CLI or action inputs.

        Args:
            vs_version: Requested version range, possibly blank.
            vswhere_path: Directory containing ``vswhere.exe``, possibly blank.

        Returns:
            DiscoveryQuery: Normalised immutable query.
        """

        return cls.model_validate({"requested_version": vs_version, "override_path": vswhere_path})


__all__ = [
    "DiscoveryQuery",
    "LATEST_VERSION",
    "VSWHERE_PATH_INPUT",
    "VS_VERSION_INPUT",
]
