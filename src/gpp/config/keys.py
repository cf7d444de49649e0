# topmark:header:start
#
#   project      : GPP
#   file         : keys.py
#   file_relpath : src/gpp/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for GPP configuration.

These keys form the external configuration schema as it appears at the top
level of ``gpp.toml`` and under ``[tool.gpp]`` in ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by GPP configuration."""

    # Root keys
    KEY_ALLOW_EXEC: Final[str] = "allow_exec"
    KEY_OUTPUT: Final[str] = "output"

    # [defines]
    SECTION_DEFINES: Final[str] = "defines"

    # pyproject.toml nesting: [tool.gpp]
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_GPP: Final[str] = "gpp"
