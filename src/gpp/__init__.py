# topmark:header:start
#
#   project      : GPP
#   file         : __init__.py
#   file_relpath : src/gpp/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GPP package.

GPP is a generic, language-agnostic preprocessor. It supports simple macros
(no function macros), ``#define``/``#undef``, ``#ifdef``/``#ifndef``,
``#elifdef``/``#elifndef``, ``#else``/``#endif``, ``#include``, and, when
allowed, ``#exec`` and ``#in``/``#endin`` to pipe text through shell commands.
``#if``/``#elif`` expressions are not supported.

Example:
    ```python
    import gpp

    ctx = gpp.Context()
    ctx.macros["my_macro"] = "my_value"
    assert gpp.process_str("My macro is my_macro\\n", ctx) == "My macro is my_value\\n"
    ```
"""

from __future__ import annotations

from gpp.core.context import Context
from gpp.core.errors import (
    AbandonedPipeError,
    ChildFailedError,
    GppError,
    GppIOError,
    InvalidCommandError,
    NestedError,
    PipeSetupError,
    TextDecodeError,
    TooManyParametersError,
    UnexpectedCommandError,
)
from gpp.core.processor import process_buf, process_file, process_line, process_str

__all__: list[str] = [
    "AbandonedPipeError",
    "ChildFailedError",
    "Context",
    "GppError",
    "GppIOError",
    "InvalidCommandError",
    "NestedError",
    "PipeSetupError",
    "TextDecodeError",
    "TooManyParametersError",
    "UnexpectedCommandError",
    "process_buf",
    "process_file",
    "process_line",
    "process_str",
]
