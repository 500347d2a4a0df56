# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the vswhere lookup chain."""

from __future__ import annotations

from pathlib import Path

from vsdevenv.config import DiscoveryQuery
from vsdevenv.locator import fallback_vswhere_path, locate_vswhere


def _forbid_which(name, path=None):  # noqa: ANN001
    raise AssertionError("PATH lookup must not run when an override is given")


def test_override_path_wins_without_consulting_other_strategies(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("vsdevenv.locator.shutil.which", _forbid_which)
    monkeypatch.setattr("vsdevenv.locator.fallback_vswhere_path", _forbid_which)
    query = DiscoveryQuery.from_inputs("latest", str(tmp_path / "missing"))

    resolved = locate_vswhere(query, environ={})

    assert resolved == tmp_path / "missing" / "vswhere.exe"


def test_search_path_hit_is_used(monkeypatch, tmp_path: Path) -> None:
    found = tmp_path / "bin" / "vswhere.exe"
    seen: dict[str, str | None] = {}

    def fake_which(name, path=None):  # noqa: ANN001
        seen["name"] = name
        seen["path"] = path
        return str(found)

    monkeypatch.setattr("vsdevenv.locator.shutil.which", fake_which)

    resolved = locate_vswhere(DiscoveryQuery(), environ={"PATH": str(found.parent)})

    assert resolved == found.resolve()
    assert seen == {"name": "vswhere", "path": str(found.parent)}


def test_falls_back_to_installer_location(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("vsdevenv.locator.shutil.which", lambda name, path=None: None)

    resolved = locate_vswhere(DiscoveryQuery(), environ={"ProgramFiles(x86)": str(tmp_path)})

    assert resolved == tmp_path / "Microsoft Visual Studio" / "Installer" / "vswhere.exe"
    assert not resolved.exists()


def test_fallback_lookup_ignores_variable_case(tmp_path: Path) -> None:
    resolved = fallback_vswhere_path({"PROGRAMFILES(X86)": str(tmp_path)})

    assert resolved.parent.parent.parent == tmp_path


def test_fallback_uses_conventional_directory_when_unset() -> None:
    resolved = fallback_vswhere_path({})

    assert str(resolved).startswith("C:\\Program Files (x86)")
    assert resolved.name == "vswhere.exe"
