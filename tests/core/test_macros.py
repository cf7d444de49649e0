# topmark:header:start
#
#   project      : GPP
#   file         : test_macros.py
#   file_relpath : tests/core/test_macros.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for whole-word, recursive macro substitution in `gpp.core.macros`."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from gpp.core.macros import replace_next_macro, substitute
from tests.conftest import mark_hypothesis_slow, parametrize

# Names and replacement values never share characters, so a finished
# substitution cannot contain a name again.
NAME_ALPHABET: str = "xyz"
VALUE_ALPHABET: str = "ab -.,"


@parametrize(
    "line, expected",
    [
        ("Foo", "Bar\n"),
        ("One Foo Two", "One Bar Two\n"),
        ("AFooB", "AFooB\n"),
        ("Foo_", "Foo_\n"),
        ("_Foo", "_Foo\n"),
        ("Foo-Foo", "Bar-Bar\n"),
        ("(Foo)", "(Bar)\n"),
        ("Foo1", "Foo1\n"),
    ],
)
def test_substitute_matches_whole_words_only(line: str, expected: str) -> None:
    """A name is replaced only when not flanked by word characters."""
    assert substitute(line, {"Foo": "Bar"}) == expected


def test_substitute_unicode_letters_are_word_characters() -> None:
    """Accented letters count as word characters on either side of a name."""
    assert substitute("éFoo Fooé Foo", {"Foo": "Bar"}) == "éFoo Fooé Bar\n"


def test_substitute_names_with_symbols() -> None:
    """Names are not limited to identifiers."""
    assert substitute("$Foo", {"$Foo": "1"}) == "1\n"
    assert substitute("a-b c", {"a-b": "dash"}) == "dash c\n"


def test_substitute_is_recursive() -> None:
    """A value containing another macro name is expanded in turn."""
    macros: dict[str, str] = {"A": "B B", "B": "C"}
    assert substitute("A", macros) == "C C\n"


def test_substitute_skips_partial_occurrence_before_whole_word() -> None:
    """An embedded occurrence does not hide a later whole-word one."""
    assert substitute("AFoo Foo", {"Foo": "Bar"}) == "AFoo Bar\n"


def test_substitute_keeps_single_trailing_newline() -> None:
    assert substitute("text\n", {}) == "text\n"
    assert substitute("", {}) == "\n"


def test_substitute_ignores_empty_names() -> None:
    assert substitute("a b", {"": "boom"}) == "a b\n"


def test_replace_next_macro_follows_table_order() -> None:
    """Macros are tried in insertion order; the first name found wins."""
    line = "Second First"
    assert replace_next_macro(line, {"First": "1", "Second": "2"}) == "Second 1"
    assert replace_next_macro(line, {"Second": "2", "First": "1"}) == "2 First"


def test_replace_next_macro_replaces_leftmost_occurrence() -> None:
    assert replace_next_macro("x y x", {"x": "z"}) == "z y x"


def test_replace_next_macro_returns_none_without_match() -> None:
    assert replace_next_macro("nothing here", {"absent": "x"}) is None


def test_define_empty_value_removes_the_word() -> None:
    assert substitute("Just Foo", {"Foo": ""}) == "Just \n"


names = st.text(alphabet=NAME_ALPHABET, min_size=1, max_size=4)
values = st.text(alphabet=VALUE_ALPHABET, max_size=6)
lines = st.text(alphabet=NAME_ALPHABET + VALUE_ALPHABET, max_size=40)


@given(line=st.text(alphabet=VALUE_ALPHABET, max_size=40), macros=st.dictionaries(names, values))
def test_substitute_without_names_only_terminates_line(line: str, macros: dict[str, str]) -> None:
    """Text that holds no macro name comes back unchanged, plus a newline."""
    assert substitute(line, macros) == f"{line}\n"


@given(line=lines, macros=st.dictionaries(names, values, max_size=4))
def test_substitute_is_idempotent(line: str, macros: dict[str, str]) -> None:
    """Substituting an already substituted line changes nothing."""
    once: str = substitute(line, macros)
    assert substitute(once, macros) == once


@mark_hypothesis_slow
@settings(max_examples=2000, deadline=None)
@given(line=lines, macros=st.dictionaries(names, values, max_size=8))
def test_substitute_output_contains_no_whole_word_name(line: str, macros: dict[str, str]) -> None:
    """After substitution no name remains as a whole word."""
    once: str = substitute(line, macros)
    assert replace_next_macro(once.rstrip("\n"), macros) is None
