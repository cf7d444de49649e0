# topmark:header:start
#
#   project      : GPP
#   file         : __main__.py
#   file_relpath : src/gpp/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running GPP via ``python -m gpp``.

Delegates to `gpp.cli.main.cli`, the same entry point as the ``gpp``
console script.

Examples:
    Preprocess a file with shell commands enabled::

        python -m gpp --allow-exec template.txt
"""

from __future__ import annotations

from gpp.cli.main import cli

if __name__ == "__main__":
    cli()
