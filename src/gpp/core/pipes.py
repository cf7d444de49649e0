# topmark:header:start
#
#   project      : GPP
#   file         : pipes.py
#   file_relpath : src/gpp/core/pipes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Child process handling for the ``#exec`` and ``#in``/``#endin`` directives.

Commands run through the platform shell (``cmd /C`` on Windows, ``sh -c``
elsewhere). ``#exec`` runs to completion immediately; ``#in`` spawns a
`ChildPipe` whose stdin receives the lines of the block and whose stdout is
drained once, when the block is closed.

Notes:
    - The stdout of an open `ChildPipe` is only read in `ChildPipe.finish`. A
      child that writes more than the OS pipe buffer before its block is closed
      blocks forever; nothing here times out.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING

from gpp.config.logging import get_logger
from gpp.core.errors import ChildFailedError, GppIOError, PipeSetupError, TextDecodeError

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger

logger: GppLogger = get_logger(__name__)


def shell_argv(command: str) -> list[str]:
    """Return the argument vector running ``command`` through the platform shell."""
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["sh", "-c", command]


def _decode(output: bytes) -> str:
    try:
        return output.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TextDecodeError(exc) from exc


def run_command(command: str) -> str:
    """Run ``command`` to completion and return its standard output.

    Standard error is captured and discarded.

    Args:
        command (str): Shell command line.

    Returns:
        str: The decoded standard output, verbatim.

    Raises:
        GppIOError: If the shell cannot be spawned.
        ChildFailedError: If the command exits with a non-zero status.
        TextDecodeError: If the output is not valid UTF-8.
    """
    logger.debug("exec: %s", command)
    try:
        completed = subprocess.run(
            shell_argv(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise GppIOError(exc) from exc

    if completed.returncode != 0:
        logger.debug("exec: %r exited with %d", command, completed.returncode)
        raise ChildFailedError(completed.returncode)
    return _decode(completed.stdout)


class ChildPipe:
    """An open ``#in`` child process.

    Attributes:
        command (str): The shell command line the child runs.
        process (subprocess.Popen[bytes]): The running child.
    """

    command: str
    process: subprocess.Popen[bytes]

    def __init__(self, command: str, process: subprocess.Popen[bytes]) -> None:
        self.command = command
        self.process = process

    @classmethod
    def spawn(cls, command: str) -> ChildPipe:
        """Start ``command`` with piped stdin and stdout.

        Raises:
            GppIOError: If the shell cannot be spawned.
        """
        logger.debug("in: spawning %s", command)
        try:
            process = subprocess.Popen(
                shell_argv(command),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
            )
        except OSError as exc:
            raise GppIOError(exc) from exc
        return cls(command, process)

    def write(self, text: str) -> None:
        """Feed ``text`` to the child's standard input.

        Raises:
            PipeSetupError: If the child has no input channel (already closed).
            GppIOError: If writing fails, e.g. because the child exited.
        """
        stdin = self.process.stdin
        if stdin is None or stdin.closed:
            raise PipeSetupError()
        if not text:
            return
        try:
            stdin.write(text.encode("utf-8"))
            stdin.flush()
        except (OSError, ValueError) as exc:
            raise GppIOError(exc) from exc

    def finish(self) -> str:
        """Close the child's input, wait for it and return everything it printed.

        Raises:
            GppIOError: If the pipes fail while draining.
            ChildFailedError: If the child exits with a non-zero status.
            TextDecodeError: If the output is not valid UTF-8.
        """
        try:
            stdout, _ = self.process.communicate()
        except (OSError, ValueError) as exc:
            raise GppIOError(exc) from exc

        logger.debug("endin: %r exited with %d", self.command, self.process.returncode)
        if self.process.returncode != 0:
            raise ChildFailedError(self.process.returncode)
        return _decode(stdout or b"")

    def abandon(self) -> None:
        """Terminate the child and release its pipes without reading its output."""
        logger.warning("Abandoning unterminated #in block: %s", self.command)
        if self.process.poll() is None:
            self.process.kill()
        for stream in (self.process.stdin, self.process.stdout):
            if stream is not None:
                stream.close()
        self.process.wait()

    def __repr__(self) -> str:
        return f"ChildPipe(command={self.command!r}, pid={self.process.pid})"
