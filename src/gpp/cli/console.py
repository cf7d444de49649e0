# topmark:header:start
#
#   project      : GPP
#   file         : console.py
#   file_relpath : src/gpp/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for user-facing program output.

Preprocessed text goes to ``out`` untouched; notices, warnings and errors go to
``err`` so that they never mix with the output stream. Internal diagnostics use
`logging` (see `gpp.config.logging`) instead.
"""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO, TextIO

import click


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes on ``err``.
        verbosity_level (int): Logging-style threshold for notices; `info` is
            shown at ``logging.INFO`` or below, `warn` below ``logging.ERROR``.
        out (BinaryIO | None): Byte stream for preprocessed output (defaults to the
            binary STDOUT stream).
        err (TextIO | None): Stream for messages (defaults to `sys.stderr`).
    """

    enable_color: bool
    verbosity_level: int
    out: BinaryIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        verbosity_level: int = logging.WARNING,
        out: BinaryIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.verbosity_level = verbosity_level
        self.out = out or click.get_binary_stream("stdout")
        self.err = err or sys.stderr

    def write_output(self, text: str) -> None:
        """Write preprocessed text to ``out`` encoded as UTF-8.

        Unlike `click.echo`, ANSI sequences present in the text are never stripped,
        and the locale encoding of the terminal does not matter.
        """
        self.out.write(text.encode("utf-8"))
        self.out.flush()

    def info(self, text: str) -> None:
        """Write a notice to stderr when running verbosely."""
        if self.verbosity_level <= logging.INFO:
            click.secho(text, file=self.err, color=self.enable_color, dim=True)

    def warn(self, text: str) -> None:
        """Write a warning to stderr unless running quietly."""
        if self.verbosity_level < logging.ERROR:
            click.secho(text, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str) -> None:
        """Write an error message to stderr (always shown)."""
        click.secho(text, file=self.err, color=self.enable_color, fg="bright_red")
