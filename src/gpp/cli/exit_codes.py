# topmark:header:start
#
#   project      : GPP
#   file         : exit_codes.py
#   file_relpath : src/gpp/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Defines standardized exit codes used by the GPP CLI application.

GPP follows the BSD `sysexits` convention where practical so other tooling can
interpret failures consistently. Any preprocessing error that has no more
specific category (an invalid directive, a failing child command, ...) maps to
``FAILURE``.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the GPP CLI.

    Attributes:
        SUCCESS: All inputs were preprocessed and the output was written.
        FAILURE: Generic preprocessing failure.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Input or child output is not valid UTF-8. Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: An input or included file does not exist. Mirrors BSD
            ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading input or writing output. Mirrors BSD
            ``EX_IOERR (74)``.
        CONFIG_ERROR: Malformed or unreadable config file. Mirrors BSD
            ``EX_CONFIG (78)``.

    Usage:
        ```python
        import subprocess
        from gpp.cli.exit_codes import ExitCode

        result = subprocess.run(["gpp", "input.txt"])
        if result.returncode == ExitCode.FILE_NOT_FOUND:
            print("input.txt is missing.")
        ```
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
