# topmark:header:start
#
#   project      : GPP
#   file         : conditionals.py
#   file_relpath : src/gpp/core/conditionals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conditional groups: ``#ifdef``/``#ifndef``, ``#elifdef``/``#elifndef``, ``#else``, ``#endif``.

State lives on the `Context` as ``(inactive_stack, group_satisfied)``:

    inactive_stack == 0   lines are emitted
    inactive_stack == 1   the innermost group is suppressing; a later branch may reactivate it
    inactive_stack  > 1   suppressed inside a suppressed group; only ``#endif`` matters

Groups cannot interleave, so a single ``group_satisfied`` flag is enough: while
``inactive_stack == 1`` it always belongs to the group that is suppressing.

These handlers run even while the context is inactive. None of them produce
output; each returns an empty string for the dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gpp.config.logging import get_logger
from gpp.core.errors import TooManyParametersError

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger
    from gpp.core.context import Context

logger: GppLogger = get_logger(__name__)


def _is_defined(name: str, context: Context, inverted: bool) -> bool:
    return (name in context.macros) != inverted


def open_group(name: str, context: Context, *, inverted: bool = False) -> str:
    """Handle ``#ifdef NAME`` (or ``#ifndef NAME`` when ``inverted``)."""
    if context.inactive_stack > 0:
        context.inactive_stack += 1
    elif _is_defined(name, context, inverted):
        context.group_satisfied = True
    else:
        context.inactive_stack = 1
        context.group_satisfied = False
    logger.debug(
        "%s %s -> inactive_stack=%d",
        "ifndef" if inverted else "ifdef",
        name,
        context.inactive_stack,
    )
    return ""


def alternate_group(name: str, context: Context, *, inverted: bool = False) -> str:
    """Handle ``#elifdef NAME`` (or ``#elifndef NAME`` when ``inverted``).

    Outside of any group this suppresses, as if an earlier branch had matched.
    """
    if context.inactive_stack == 0:
        context.inactive_stack = 1
        context.group_satisfied = True
    elif (
        context.inactive_stack == 1
        and not context.group_satisfied
        and _is_defined(name, context, inverted)
    ):
        context.inactive_stack = 0
        context.group_satisfied = True
    return ""


def else_group(argument: str, context: Context) -> str:
    """Handle ``#else``.

    Raises:
        TooManyParametersError: If ``argument`` is not empty.
    """
    if argument:
        raise TooManyParametersError("else")
    if context.inactive_stack == 0:
        context.inactive_stack = 1
        context.group_satisfied = True
    elif context.inactive_stack == 1 and not context.group_satisfied:
        context.inactive_stack = 0
        context.group_satisfied = True
    return ""


def close_group(argument: str, context: Context) -> str:
    """Handle ``#endif``.

    Raises:
        TooManyParametersError: If ``argument`` is not empty.
    """
    if argument:
        raise TooManyParametersError("endif")
    if context.inactive_stack > 0:
        context.inactive_stack -= 1
    return ""
