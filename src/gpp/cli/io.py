# topmark:header:start
#
#   project      : GPP
#   file         : io.py
#   file_relpath : src/gpp/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input handling for the CLI.

Each positional argument names one input:

- ``-`` reads STDIN (labelled ``<stdin>`` in error locations);
- ``:text`` preprocesses ``text`` itself, so ``gpp ":#define A B"`` works
  without a file;
- anything else is a path, opened relative to the working directory.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

import click

from gpp.constants import LITERAL_TEXT_PREFIX, STDIN_FILENAME, STDIN_SOURCE_LABEL
from gpp.core.processor import process_buf, process_file, process_str

if TYPE_CHECKING:
    from gpp.core.context import Context


class InputKind(str, Enum):
    """How a positional argument is interpreted."""

    STDIN = "stdin"
    LITERAL = "literal"
    FILE = "file"


class InputSource(NamedTuple):
    """A resolved positional argument.

    Attributes:
        kind (InputKind): Input family.
        value (str): The path, or the literal text (prefix removed).
        label (str): Name shown to the user for this input.
    """

    kind: InputKind
    value: str
    label: str


def resolve_input(arg: str) -> InputSource:
    """Classify a positional argument."""
    if arg == STDIN_FILENAME:
        return InputSource(InputKind.STDIN, arg, STDIN_SOURCE_LABEL)
    if arg.startswith(LITERAL_TEXT_PREFIX):
        return InputSource(InputKind.LITERAL, arg[len(LITERAL_TEXT_PREFIX) :], arg)
    return InputSource(InputKind.FILE, arg, arg)


def process_input(source: InputSource, context: Context) -> str:
    """Preprocess one input with the shared ``context`` and return its output.

    Raises:
        GppError: Any engine error, as raised by the ``process_*`` functions.
    """
    if source.kind == InputKind.STDIN:
        return process_buf(click.get_binary_stream("stdin"), STDIN_SOURCE_LABEL, context)
    if source.kind == InputKind.LITERAL:
        return process_str(source.value, context)
    return process_file(source.value, context)
