# topmark:header:start
#
#   project      : GPP
#   file         : errors.py
#   file_relpath : src/gpp/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the GPP processing engine.

Every engine failure derives from `GppError`. Errors raised while handling a
single line are wrapped by the stream driver in a `NestedError` carrying the
source label and the 0-based line number; ``#include`` chains therefore nest
one `NestedError` per file.

Usage:
    ```python
    try:
        gpp.process_file("main.txt", ctx)
    except gpp.NestedError as exc:
        print(exc)  # Error in main.txt:3: Error in other.txt:0: Invalid command 'foo'
        print(type(exc.root).__name__)  # InvalidCommandError
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class GppError(Exception):
    """Base class for all preprocessing errors."""


class InvalidCommandError(GppError):
    """Unknown directive, or an exec-family directive used without permission."""

    def __init__(self, command_name: str) -> None:
        super().__init__(f"Invalid command '{command_name}'")
        self.command_name = command_name


class TooManyParametersError(GppError):
    """A directive that takes no argument was given one."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Too many parameters for #{command}")
        self.command = command


class UnexpectedCommandError(GppError):
    """A directive appeared where it cannot apply (``#endin`` without ``#in``)."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Unexpected command #{command}")
        self.command = command


class ChildFailedError(GppError):
    """A shell command exited with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        super().__init__(f"Child failed with exit code {returncode}")
        self.returncode = returncode


class PipeSetupError(GppError):
    """The input channel of a child process is not available."""

    def __init__(self) -> None:
        super().__init__("Pipe error")


class GppIOError(GppError):
    """Underlying read, write or spawn failure."""

    def __init__(self, cause: OSError | ValueError) -> None:
        super().__init__(f"I/O error: {cause}")
        self.cause = cause


class TextDecodeError(GppError):
    """Captured child output is not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError) -> None:
        super().__init__(f"UTF-8 error: {cause}")
        self.cause = cause


class AbandonedPipeError(GppError):
    """A context was closed while ``#in`` blocks were still open."""

    def __init__(self, count: int) -> None:
        super().__init__(f"{count} unterminated #in block(s)")
        self.count = count


class NestedError(GppError):
    """Location wrapper around another `GppError`.

    Attributes:
        source (str): Label of the source being processed (a path, ``<string>``,
            ``<stdin>``).
        line (int): 0-based line number within ``source``.
        error (GppError): The wrapped error; another `NestedError` for
            ``#include`` chains.
    """

    def __init__(self, source: str, line: int, error: GppError) -> None:
        super().__init__(f"Error in {source}:{line}: {error}")
        self.source = source
        self.line = line
        self.error = error

    def chain(self) -> Iterator[GppError]:
        """Yield this error and every wrapped error, outermost first."""
        current: GppError = self
        while True:
            yield current
            if not isinstance(current, NestedError):
                return
            current = current.error

    @property
    def root(self) -> GppError:
        """Return the innermost, non-location error."""
        *_, last = self.chain()
        return last
