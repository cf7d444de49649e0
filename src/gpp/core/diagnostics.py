# topmark:header:start
#
#   project      : GPP
#   file         : diagnostics.py
#   file_relpath : src/gpp/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics support.

Diagnostics are non-fatal findings (for example a config value of the wrong
type that was skipped). Fatal problems raise exceptions instead.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from gpp.config.logging import get_logger

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger

logger: GppLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics, ordered by importance: ERROR > WARNING > INFO."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str

    def render(self, *, color: bool = False) -> str:
        """Return ``"[level] message"``, colored by level when ``color`` is set."""
        text: str = f"[{self.level.value}] {self.message}"
        return self.level.color(text) if color else text


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics gathered while building a config."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticLog:
        """Create a DiagnosticLog from an iterable of diagnostics."""
        return cls(items=list(diagnostics))

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic."""
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def __len__(self) -> int:
        return len(self.items)
