# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for parsing and diffing captured environment listings."""

from __future__ import annotations

import codecs

import pytest

from vsdevenv.environment import decode_block, diff_environment, parse_environment_block, parse_lines


def test_parse_last_assignment_wins() -> None:
    block = "A=1\r\nB=x\r\nA=2\r\n".encode("utf-16-le")

    parsed = parse_environment_block(block)

    assert dict(parsed) == {"A": "2", "B": "x"}


def test_parse_ignores_lines_without_separator() -> None:
    parsed = parse_lines("A=1\nJUNKLINE\nB=2")

    assert dict(parsed) == {"A": "1", "B": "2"}


def test_parse_splits_on_first_equals_only() -> None:
    parsed = parse_lines("CL=/DOPT=1 /W4\nEMPTY=")

    assert parsed["CL"] == "/DOPT=1 /W4"
    assert parsed["EMPTY"] == ""


def test_parse_skips_nameless_entries() -> None:
    parsed = parse_lines("=C:=C:\\work\nPATH=C:\\bin")

    assert dict(parsed) == {"PATH": "C:\\bin"}


def test_parse_preserves_name_case() -> None:
    parsed = parse_lines("Path=a\nPATH=b")

    assert dict(parsed) == {"Path": "a", "PATH": "b"}


def test_decode_drops_bom_and_trailing_whitespace_is_ignored() -> None:
    block = codecs.BOM_UTF16_LE + "INCLUDE=C:\\inc\r\n\r\n  ".encode("utf-16-le")

    assert decode_block(block).startswith("INCLUDE")
    assert dict(parse_environment_block(block)) == {"INCLUDE": "C:\\inc"}


def test_parse_empty_block_yields_empty_mapping() -> None:
    assert dict(parse_environment_block(b"")) == {}


def test_parsed_mapping_is_read_only() -> None:
    parsed = parse_lines("A=1")

    with pytest.raises(TypeError):
        parsed["A"] = "2"  # type: ignore[index]


def test_diff_reports_new_and_changed_entries_only() -> None:
    captured = {"PATH": "C:\\new\\bin", "FOO": "bar", "SAME": "1"}
    ambient = {"PATH": "C:\\old\\bin", "SAME": "1", "ONLY_AMBIENT": "keep"}

    changes = diff_environment(captured, ambient)

    assert dict(changes) == {"PATH": "C:\\new\\bin", "FOO": "bar"}
    assert "ONLY_AMBIENT" not in changes


def test_diff_of_identical_environments_is_empty() -> None:
    env = {"A": "1", "B": "2"}

    assert dict(diff_environment(env, dict(env))) == {}


@pytest.mark.parametrize(
    ("captured", "ambient"),
    [
        ({"A": "1"}, {}),
        ({"A": "1", "B": "2"}, {"A": "1"}),
        ({"A": "", "B": "x"}, {"A": "y", "B": "x"}),
    ],
)
def test_diff_contains_exactly_mismatched_entries(captured: dict[str, str], ambient: dict[str, str]) -> None:
    changes = diff_environment(captured, ambient)

    for name, value in captured.items():
        assert (name in changes) == (ambient.get(name) != value)
        if name in changes:
            assert changes[name] == value


def test_parse_keeps_unicode_line_separators_inside_values() -> None:
    block = "TITLE=a\u2028b\x85c\x1cd\r\nX=1\r\n".encode("utf-16-le")

    parsed = parse_environment_block(block)

    assert dict(parsed) == {"TITLE": "a\u2028b\x85c\x1cd", "X": "1"}
