# topmark:header:start
#
#   project      : GPP
#   file         : errors.py
#   file_relpath : src/gpp/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the GPP CLI.

Usage:
    Raise these exceptions from the command to signal errors with standardized
    messages and exit codes. `error_for_gpp_error` translates an engine error
    into the matching CLI error.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from gpp.cli.exit_codes import ExitCode
from gpp.core.errors import GppError, GppIOError, NestedError, TextDecodeError


class GppCliError(click.ClickException):
    """Base class for all GPP CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class GppUsageError(GppCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class GppConfigError(GppCliError):
    """Error for configuration errors (unreadable/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class GppFileNotFoundError(GppCliError):
    """Error when an input or included path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class GppIOCliError(GppCliError):
    """Error for I/O errors reading input or writing output."""

    exit_code = ExitCode.IO_ERROR


class GppEncodingError(GppCliError):
    """Error for text decoding errors (input or child output not UTF-8)."""

    exit_code = ExitCode.ENCODING_ERROR


class GppProcessingError(GppCliError):
    """Error for preprocessing failures without a more specific category."""

    exit_code = ExitCode.FAILURE


def error_for_gpp_error(exc: GppError) -> GppCliError:
    """Return the CLI error matching an engine error.

    The category is chosen from the innermost error of a `NestedError` chain;
    the message keeps the full location chain.
    """
    root: GppError = exc.root if isinstance(exc, NestedError) else exc
    message: str = str(exc)
    if isinstance(root, TextDecodeError):
        return GppEncodingError(message)
    if isinstance(root, GppIOError):
        if isinstance(root.cause, FileNotFoundError):
            return GppFileNotFoundError(message)
        if isinstance(root.cause, UnicodeDecodeError):
            return GppEncodingError(message)
        return GppIOCliError(message)
    return GppProcessingError(message)
