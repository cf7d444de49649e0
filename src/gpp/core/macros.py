# topmark:header:start
#
#   project      : GPP
#   file         : macros.py
#   file_relpath : src/gpp/core/macros.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Macro substitution.

A macro name matches only as a whole word: the characters immediately before
and after the match, when present, must not be word characters (Unicode
alphanumerics or ``_``, i.e. regex ``\w``). Names themselves may contain any
characters, so ``$Foo`` or ``a-b`` are valid names.

Substitution replaces one occurrence at a time and then rescans the whole
line, which makes it fully recursive: a value containing another macro name is
expanded as well. Macros are tried in table insertion order and the leftmost
occurrence of the first matching name is replaced.

Notes:
    A macro whose value contains its own name never terminates. There is no
    cycle detection.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@lru_cache(maxsize=1024)
def _word_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(name)}(?!\w)")


def replace_next_macro(line: str, macros: Mapping[str, str]) -> str | None:
    """Replace the first whole-word macro occurrence found in ``line``.

    Args:
        line (str): Text to scan.
        macros (Mapping[str, str]): Macro table; iteration order is the tie-break.

    Returns:
        str | None: The line with one occurrence replaced, or ``None`` if no
            macro name occurs as a whole word.
    """
    for name, value in macros.items():
        if not name:
            continue
        match = _word_pattern(name).search(line)
        if match is None:
            continue
        return f"{line[: match.start()]}{value}{line[match.end() :]}"
    return None


def substitute(line: str, macros: Mapping[str, str]) -> str:
    """Expand every macro in ``line`` and terminate it with a newline.

    Args:
        line (str): A single line of plain text, with or without its ``\\n``.
        macros (Mapping[str, str]): Macro table.

    Returns:
        str: The expanded line, ending in exactly one ``\\n``.
    """
    while True:
        replaced: str | None = replace_next_macro(line, macros)
        if replaced is None:
            break
        line = replaced
    return line if line.endswith("\n") else f"{line}\n"
