# topmark:header:start
#
#   project      : GPP
#   file         : context.py
#   file_relpath : src/gpp/core/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing context shared by every line of one preprocessing session.

A `Context` is created once by the caller and handed to every ``process_*``
call. Macros defined by one call stay visible to the next, and files pulled in
by ``#include`` share the same context rather than getting a scope of their
own.

Example:
    ```python
    from gpp import Context, process_str

    with Context(macros={"my_macro": "my_value"}) as ctx:
        assert process_str("My macro is my_macro\\n", ctx) == "My macro is my_value\\n"
        process_str("#define Line Row\\n", ctx)
        assert ctx.macros["Line"] == "Row"
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gpp.config.logging import get_logger
from gpp.core.errors import AbandonedPipeError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from gpp.config.logging import GppLogger
    from gpp.core.pipes import ChildPipe

logger: GppLogger = get_logger(__name__)

__all__: list[str] = [
    "Context",
]


@dataclass
class Context:
    """Mutable state threaded through one preprocessing session.

    There are no restrictions on macro names: entries can be added directly to
    ``macros`` with names ``#define`` could not produce. When substituted into
    text, a name must still be flanked by characters that are neither
    alphanumeric nor an underscore.

    Attributes:
        macros (dict[str, str]): Currently defined macros, name to replacement text.
        inactive_stack (int): Number of nested conditional groups currently
            suppressing output. Text is emitted only while this is 0.
        group_satisfied (bool): True once a branch of the innermost active
            conditional group has been taken; later ``#elifdef``/``#else``
            branches of that group are skipped.
        allow_exec (bool): Whether ``#exec``, ``#in`` and ``#endin`` are recognized.
        pipe_stack (list[ChildPipe]): Children opened by ``#in``, innermost last.
    """

    macros: dict[str, str] = field(default_factory=dict)
    inactive_stack: int = 0
    group_satisfied: bool = False
    allow_exec: bool = False
    pipe_stack: list[ChildPipe] = field(default_factory=list, repr=False)

    @classmethod
    def with_exec(cls, macros: Mapping[str, str] | None = None) -> Context:
        """Create a context that accepts ``#exec``, ``#in`` and ``#endin``."""
        return cls(macros=dict(macros or {}), allow_exec=True)

    @property
    def is_active(self) -> bool:
        """Whether text and non-conditional directives are currently processed."""
        return self.inactive_stack == 0

    def close(self) -> None:
        """Reap children of unterminated ``#in`` blocks.

        Raises:
            AbandonedPipeError: If any ``#in`` block was still open.
        """
        count: int = self._abandon_pipes()
        if count:
            raise AbandonedPipeError(count)

    def _abandon_pipes(self) -> int:
        count: int = len(self.pipe_stack)
        while self.pipe_stack:
            self.pipe_stack.pop().abandon()
        return count

    def __enter__(self) -> Context:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        # Another error is already propagating; do not mask it.
        count: int = self._abandon_pipes()
        if count:
            logger.debug("Reaped %d open #in block(s) after %s", count, exc_type.__name__)
