# topmark:header:start
#
#   project      : GPP
#   file         : constants.py
#   file_relpath : src/gpp/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GPP Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

GPP_VERSION: str = get_version("gpp")

# Source labels used in error locations
STRING_SOURCE_LABEL: str = "<string>"
STDIN_SOURCE_LABEL: str = "<stdin>"

# CLI input conventions: "-" reads STDIN, ":text" preprocesses "text" itself
STDIN_FILENAME: str = "-"
LITERAL_TEXT_PREFIX: str = ":"

# Configuration file names, looked up in the working directory
GPP_TOML_NAME: str = "gpp.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
