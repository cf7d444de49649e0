# topmark:header:start
#
#   project      : GPP
#   file         : processor.py
#   file_relpath : src/gpp/core/processor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stream driver for the GPP engine.

Entry points, from most to least primitive:

- `process_line`: one line in, that line's output out.
- `process_buf`: any line-buffered source (text or binary file object, or an
  iterable of text or byte chunks), with a label used in error locations.
- `process_str`: a whole string, labelled ``<string>``.
- `process_file`: a named file, labelled with its path. ``#include`` recurses
  through here with the same `Context`.

Each per-line failure is wrapped in a `NestedError` holding the source label and
the 0-based line number, and aborts the call; no partial output is returned.
"""

from __future__ import annotations

import codecs
import io
from typing import IO, TYPE_CHECKING

from gpp.config.logging import get_logger
from gpp.constants import STRING_SOURCE_LABEL
from gpp.core.commands import LineKind, parse_line, strip_line_terminator
from gpp.core.errors import GppError, GppIOError, NestedError
from gpp.core.macros import substitute

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from os import PathLike

    from gpp.config.logging import GppLogger
    from gpp.core.commands import ParsedLine
    from gpp.core.context import Context

logger: GppLogger = get_logger(__name__)

__all__: list[str] = [
    "process_buf",
    "process_file",
    "process_line",
    "process_str",
]


def process_line(line: str, context: Context) -> str:
    """Process a single line of input.

    This is the smallest processing function; all others are wrappers around
    it. ``line`` must not contain embedded newlines; a trailing ``\\n`` or
    ``\\r\\n`` is allowed and ignored.

    While an ``#in`` block is open, the output is written to the innermost child
    instead and the returned string is empty.

    Args:
        line (str): The line to process.
        context (Context): The processing context (mutated).

    Returns:
        str: The line's output: substituted text ending in ``\\n``, a directive's
            output, or ``""`` when nothing is emitted.

    Raises:
        GppError: If the line is an invalid directive or a directive fails.

    Example:
        ```python
        ctx = Context(macros={"Foo": "Two"})
        assert process_line("One Foo Three", ctx) == "One Two Three\\n"
        assert process_line("#define Foo Bar", ctx) == ""
        assert ctx.macros["Foo"] == "Bar"
        ```
    """
    parsed: ParsedLine = parse_line(strip_line_terminator(line), context)

    output: str
    if parsed.kind == LineKind.COMMAND:
        assert parsed.command is not None
        if context.is_active or parsed.command.ignores_inactive:
            output = parsed.command.handler(parsed.body, context)
        else:
            output = ""
    elif context.is_active:
        output = substitute(parsed.body, context.macros)
    else:
        output = ""

    if context.pipe_stack:
        context.pipe_stack[-1].write(output)
        return ""
    return output


def _decode_lines(chunks: Iterable[str | bytes]) -> Iterator[str]:
    """Yield text lines, decoding bytes as UTF-8 and splitting on ``\\n`` only.

    Chunk boundaries carry no meaning: a line, or a multi-byte UTF-8 sequence,
    may span several chunks.
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    pending: str = ""
    for chunk in chunks:
        text: str
        if isinstance(chunk, bytes):
            try:
                text = decoder.decode(chunk)
            except UnicodeDecodeError as exc:
                raise GppIOError(exc) from exc
        else:
            text = chunk
        pending += text
        *complete, pending = pending.split("\n")
        for line in complete:
            yield line[:-1] if line.endswith("\r") else line
    try:
        pending += decoder.decode(b"", final=True)
    except UnicodeDecodeError as exc:
        raise GppIOError(exc) from exc
    if pending:
        yield pending


def process_buf(
    buf: IO[str] | IO[bytes] | Iterable[str | bytes],
    label: str,
    context: Context,
) -> str:
    """Process a line-buffered source.

    The items of ``buf`` are treated as chunks of one stream, not as lines: they
    are concatenated and split on ``\\n``, so an item without a newline runs on
    into the next. A trailing ``\\r`` is dropped, and a final newline does not
    produce an extra empty line.

    Args:
        buf (IO[str] | IO[bytes] | Iterable[str | bytes]): The source. Binary
            input is decoded as UTF-8, incrementally across chunks.
        label (str): Name of the source used in error locations.
        context (Context): The processing context (mutated).

    Returns:
        str: The concatenated output of every line.

    Raises:
        NestedError: Wrapping the first failure, located at ``label`` and the
            0-based line number.
    """
    result: list[str] = []
    lines: Iterator[str] = _decode_lines(buf)
    num: int = 0
    while True:
        try:
            line: str = next(lines)
        except StopIteration:
            break
        except OSError as exc:
            raise NestedError(label, num, GppIOError(exc)) from exc
        except GppError as exc:
            raise NestedError(label, num, exc) from exc

        logger.trace("%s:%d: %r", label, num, line)
        try:
            result.append(process_line(line, context))
        except GppError as exc:
            raise NestedError(label, num, exc) from exc
        num += 1

    return "".join(result)


def process_str(text: str, context: Context) -> str:
    """Process a multi-line string.

    Args:
        text (str): Text to process.
        context (Context): The processing context (mutated).

    Returns:
        str: The processed text.

    Raises:
        NestedError: Wrapping the first failure, labelled ``<string>``.

    Example:
        ```python
        assert process_str("#define A 1\\n A 2 3 \\n", Context()) == " 1 2 3 \\n"
        ```
    """
    return process_buf(io.StringIO(text), STRING_SOURCE_LABEL, context)


def process_file(path: str | PathLike[str], context: Context) -> str:
    """Process a named file, resolved against the current working directory.

    Args:
        path (str | PathLike[str]): File to process; also its error label.
        context (Context): The processing context (mutated), shared with any
            files it includes.

    Returns:
        str: The processed file contents.

    Raises:
        GppIOError: If the file cannot be opened.
        NestedError: Wrapping the first per-line failure, labelled with ``path``.
    """
    logger.debug("Processing file %s", path)
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise GppIOError(exc) from exc
    with handle:
        return process_buf(handle, str(path), context)
