# topmark:header:start
#
#   project      : GPP
#   file         : test_commands.py
#   file_relpath : tests/core/test_commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for directive parsing and the directive registry."""

from __future__ import annotations

import pytest

from gpp.core.commands import (
    COMMANDS,
    LineKind,
    lookup_command,
    parse_line,
    process_define,
    process_undef,
    strip_line_terminator,
)
from gpp.core.context import Context
from gpp.core.errors import InvalidCommandError
from tests.conftest import parametrize


def test_plain_text_line() -> None:
    parsed = parse_line("  just text", Context())
    assert parsed.kind == LineKind.TEXT
    assert parsed.body == "  just text"
    assert parsed.command is None


@parametrize(
    "line, name, argument",
    [
        ("#define A B", "define", "A B"),
        ("  # define A B", "define", "A B"),
        ("#define    A B", "define", "A B"),
        ("#\tdefine A", "define", "A"),
        ("#endif", "endif", ""),
        ("#include dir/file.txt", "include", "dir/file.txt"),
    ],
)
def test_directive_name_and_argument(line: str, name: str, argument: str) -> None:
    parsed = parse_line(line, Context())
    assert parsed.kind == LineKind.COMMAND
    assert parsed.command is not None
    assert parsed.command.name == name
    assert parsed.body == argument


def test_double_hash_is_literal_text() -> None:
    parsed = parse_line("  ## not a directive", Context())
    assert parsed.kind == LineKind.TEXT
    assert parsed.body == "# not a directive"


def test_unknown_directive_raises() -> None:
    with pytest.raises(InvalidCommandError, match=r"Invalid command 'bogus'"):
        parse_line("#bogus arg", Context())


def test_bare_marker_is_an_invalid_empty_command() -> None:
    with pytest.raises(InvalidCommandError) as info:
        parse_line("#", Context())
    assert info.value.command_name == ""


@parametrize("name", ["exec", "in", "endin"])
def test_exec_family_hidden_without_permission(name: str) -> None:
    with pytest.raises(InvalidCommandError):
        lookup_command(name, Context())
    assert lookup_command(name, Context.with_exec()).requires_exec


def test_registry_names_are_unique() -> None:
    names: list[str] = [spec.name for spec in COMMANDS]
    assert len(names) == len(set(names))


def test_only_conditionals_ignore_inactive() -> None:
    ignoring: set[str] = {spec.name for spec in COMMANDS if spec.ignores_inactive}
    assert ignoring == {"ifdef", "ifndef", "elifdef", "elifndef", "else", "endif"}


def test_define_splits_on_first_space() -> None:
    ctx = Context()
    assert process_define("Name  two words", ctx) == ""
    assert ctx.macros["Name"] == " two words"


def test_define_without_value_is_empty() -> None:
    ctx = Context()
    process_define("Flag", ctx)
    assert ctx.macros == {"Flag": ""}


def test_undef_missing_name_is_ignored() -> None:
    ctx = Context(macros={"A": "1"})
    process_undef("B", ctx)
    process_undef("A", ctx)
    assert ctx.macros == {}


@parametrize(
    "line, expected",
    [("a\n", "a"), ("a\r\n", "a"), ("a", "a"), ("a\r", "a\r"), ("\n", "")],
)
def test_strip_line_terminator(line: str, expected: str) -> None:
    assert strip_line_terminator(line) == expected
