# topmark:header:start
#
#   project      : GPP
#   file         : test_errors.py
#   file_relpath : tests/core/test_errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for error messages and `NestedError` chains."""

from __future__ import annotations

import gpp
from gpp.core.errors import (
    ChildFailedError,
    GppError,
    GppIOError,
    InvalidCommandError,
    NestedError,
    PipeSetupError,
    TooManyParametersError,
    UnexpectedCommandError,
)
from tests.conftest import parametrize


@parametrize(
    "error, message",
    [
        (InvalidCommandError("foo"), "Invalid command 'foo'"),
        (TooManyParametersError("else"), "Too many parameters for #else"),
        (UnexpectedCommandError("endin"), "Unexpected command #endin"),
        (ChildFailedError(1), "Child failed with exit code 1"),
        (PipeSetupError(), "Pipe error"),
        (GppIOError(FileNotFoundError(2, "No such file or directory")), "I/O error: "),
    ],
)
def test_messages(error: GppError, message: str) -> None:
    assert str(error).startswith(message)
    assert isinstance(error, GppError)


def test_nested_error_chain_and_root() -> None:
    root = InvalidCommandError("foo")
    inner = NestedError("other.txt", 0, root)
    outer = NestedError("main.txt", 3, inner)

    assert str(outer) == "Error in main.txt:3: Error in other.txt:0: Invalid command 'foo'"
    assert list(outer.chain()) == [outer, inner, root]
    assert outer.root is root
    assert inner.root is root


def test_public_api_reexports() -> None:
    assert gpp.NestedError is NestedError
    for name in ("Context", "process_line", "process_buf", "process_str", "process_file"):
        assert name in gpp.__all__
