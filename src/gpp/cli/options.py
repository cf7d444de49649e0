# topmark:header:start
#
#   project      : GPP
#   file         : options.py
#   file_relpath : src/gpp/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color) and their
resolution logic, so the command itself can stay thin. The helpers here are
Click-aware.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from enum import Enum
from typing import ParamSpec, TypeVar

import click

from gpp.cli.errors import GppUsageError
from gpp.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` was passed.
        quiet_count (int): Number of times ``-q`` was passed.

    Returns:
        int: A `logging`-style level: TRACE for ``-vvv``, DEBUG for ``-vv``,
            INFO for ``-v``, ERROR for ``-q``, WARNING otherwise.

    Raises:
        GppUsageError: If both flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise GppUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (report each input on stderr).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress warnings; only errors are reported.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stderr_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled for console messages.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from CLI options.
        stderr_isatty (bool | None): Whether stderr is a TTY; if None, auto-detected.

    Returns:
        bool: True if color output should be enabled.

    Behavior:
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stderr is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stderr_isatty is None:
        try:
            stderr_isatty = sys.stderr.isatty()
        except (AttributeError, ValueError):
            stderr_isatty = False
    return bool(stderr_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f
