# topmark:header:start
#
#   project      : GPP
#   file         : commands.py
#   file_relpath : src/gpp/core/commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Directive registry and line classification.

A line whose first non-blank character is ``#`` is a directive::

    #<name>[ <argument>]

Whitespace between ``#`` and the name is skipped, the name ends at the first
space, and the argument is the rest of the line with leading whitespace
removed. A doubled marker (``##``) is the literal-hash escape: the line is
plain text with one ``#`` removed.

Each directive is described by a `CommandSpec`. ``requires_exec`` hides the
directive unless the context allows shell execution; ``ignores_inactive``
marks the conditional directives, which must run even inside a suppressed
group so that nesting is tracked.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Final

from gpp.config.logging import get_logger
from gpp.core.conditionals import alternate_group, close_group, else_group, open_group
from gpp.core.errors import InvalidCommandError, TooManyParametersError, UnexpectedCommandError
from gpp.core.pipes import ChildPipe, run_command

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger
    from gpp.core.context import Context

logger: GppLogger = get_logger(__name__)

COMMAND_MARKER: Final[str] = "#"

# A handler receives the directive argument and returns the line's output.
Handler = Callable[[str, "Context"], str]


@dataclass(frozen=True)
class CommandSpec:
    """A named directive and its dispatch flags.

    Attributes:
        name (str): Directive name as written after the marker.
        handler (Handler): Callable producing the line output.
        requires_exec (bool): Only recognized when ``Context.allow_exec`` is set.
        ignores_inactive (bool): Still executed while a conditional group suppresses output.
    """

    name: str
    handler: Handler
    requires_exec: bool = False
    ignores_inactive: bool = False


def process_define(argument: str, context: Context) -> str:
    """Handle ``#define NAME [VALUE]``; a missing value defines ``NAME`` as empty."""
    name, _, value = argument.partition(" ")
    context.macros[name] = value
    logger.debug("define %s = %r", name, value)
    return ""


def process_undef(argument: str, context: Context) -> str:
    """Handle ``#undef NAME``; undefined names are ignored."""
    context.macros.pop(argument, None)
    logger.debug("undef %s", argument)
    return ""


def process_include(argument: str, context: Context) -> str:
    """Handle ``#include PATH``.

    ``PATH`` is opened relative to the current working directory, not to the
    directory of the including file.
    """
    # Local import: the driver imports this module.
    from gpp.core.processor import process_file

    logger.debug("include %s", argument)
    return process_file(argument, context)


def process_exec(argument: str, context: Context) -> str:
    """Handle ``#exec CMD``: the command's standard output replaces the line."""
    return run_command(argument)


def process_in(argument: str, context: Context) -> str:
    """Handle ``#in CMD``: open a child that receives the following lines."""
    context.pipe_stack.append(ChildPipe.spawn(argument))
    return ""


def process_endin(argument: str, context: Context) -> str:
    """Handle ``#endin``: close the innermost ``#in`` block and emit its output.

    Raises:
        TooManyParametersError: If ``argument`` is not empty.
        UnexpectedCommandError: If no ``#in`` block is open.
    """
    if argument:
        raise TooManyParametersError("endin")
    if not context.pipe_stack:
        raise UnexpectedCommandError("endin")
    child: ChildPipe = context.pipe_stack.pop()
    return child.finish()


COMMANDS: Final[tuple[CommandSpec, ...]] = (
    CommandSpec("define", process_define),
    CommandSpec("undef", process_undef),
    CommandSpec("include", process_include),
    CommandSpec("ifdef", open_group, ignores_inactive=True),
    CommandSpec("ifndef", partial(open_group, inverted=True), ignores_inactive=True),
    CommandSpec("elifdef", alternate_group, ignores_inactive=True),
    CommandSpec("elifndef", partial(alternate_group, inverted=True), ignores_inactive=True),
    CommandSpec("else", else_group, ignores_inactive=True),
    CommandSpec("endif", close_group, ignores_inactive=True),
    CommandSpec("exec", process_exec, requires_exec=True),
    CommandSpec("in", process_in, requires_exec=True),
    CommandSpec("endin", process_endin, requires_exec=True),
)

_COMMANDS_BY_NAME: Final[dict[str, CommandSpec]] = {spec.name: spec for spec in COMMANDS}


def lookup_command(name: str, context: Context) -> CommandSpec:
    """Return the directive called ``name`` as visible from ``context``.

    Raises:
        InvalidCommandError: If ``name`` is unknown, or requires exec permission
            that ``context`` does not grant.
    """
    spec: CommandSpec | None = _COMMANDS_BY_NAME.get(name)
    if spec is None or (spec.requires_exec and not context.allow_exec):
        raise InvalidCommandError(name)
    return spec


class LineKind(str, Enum):
    """Classification of an input line."""

    TEXT = "text"
    COMMAND = "command"


@dataclass(frozen=True)
class ParsedLine:
    """A classified line.

    Attributes:
        kind (LineKind): Plain text or directive.
        body (str): The text to substitute, or the directive argument.
        command (CommandSpec | None): The directive, when ``kind`` is ``COMMAND``.
    """

    kind: LineKind
    body: str
    command: CommandSpec | None = None


def strip_line_terminator(line: str) -> str:
    """Remove one trailing ``\\n`` or ``\\r\\n`` from ``line``."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def parse_line(line: str, context: Context) -> ParsedLine:
    """Classify ``line`` as plain text or a directive.

    Args:
        line (str): One line, without its terminator.
        context (Context): Consulted for exec permission.

    Returns:
        ParsedLine: The classified line.

    Raises:
        InvalidCommandError: If the line names an unknown or forbidden directive.
    """
    stripped: str = line.lstrip()
    if not stripped.startswith(COMMAND_MARKER):
        return ParsedLine(LineKind.TEXT, line)

    rest: str = stripped[len(COMMAND_MARKER) :]
    if rest.startswith(COMMAND_MARKER):
        return ParsedLine(LineKind.TEXT, rest)

    name, _, argument = rest.lstrip().partition(" ")
    spec: CommandSpec = lookup_command(name, context)
    return ParsedLine(LineKind.COMMAND, argument.lstrip(), spec)
