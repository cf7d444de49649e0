# topmark:header:start
#
#   project      : GPP
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers.

Relative input paths, ``#include`` and config discovery all resolve against
the working directory: tests that create files use the `isolation` fixture
(see ``tests/conftest.py``) before calling `run_cli`.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from gpp.cli.exit_codes import ExitCode
from gpp.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI in the current working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["-D", "A=1", ":A"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input for the command.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli([":#define A b", ":A"])
        assert_SUCCESS(result)
        assert result.stdout == "b\\n"
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit_code(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
