# topmark:header:start
#
#   project      : GPP
#   file         : io.py
#   file_relpath : src/gpp/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources and extract typed values.

Parsing is done with `tomlkit` and returned as plain `dict` structures.

Two families of getters exist:
- *Unchecked* getters (`get_table_value`): return defaults and only emit **debug** logs.
- *Checked* getters: validate the expected shape and record **warnings** in a
  `DiagnosticLog` (and also log a warning).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from gpp.config.keys import Toml
from gpp.config.logging import get_logger
from gpp.constants import GPP_TOML_NAME, PYPROJECT_TOML_NAME

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger
    from gpp.core.diagnostics import DiagnosticLog

logger: GppLogger = get_logger(__name__)

# Parsed TOML table, as produced by ``tomlkit.TOMLDocument.unwrap()``
TomlTable = dict[str, Any]


class ConfigLoadError(Exception):
    """A configuration file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load configuration from {path}: {reason}")
        self.path = path
        self.reason = reason


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``gpp.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigLoadError(path, str(e)) from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigLoadError(path, str(e)) from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_gpp_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the GPP settings held by a parsed config document.

    ``pyproject.toml`` keeps them under ``[tool.gpp]``; any other file holds
    them at the top level.

    Returns:
        TomlTable | None: The settings table, or ``None`` when a
            ``pyproject.toml`` has no ``[tool.gpp]`` section.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    tool_tbl: TomlTable = get_table_value(data, Toml.SECTION_TOOL)
    if Toml.SECTION_TOOL_GPP not in tool_tbl:
        logger.debug("No [tool.gpp] section in %s", path)
        return None
    return get_table_value(tool_tbl, Toml.SECTION_TOOL_GPP)


def discover_config_file(start: Path) -> Path | None:
    """Return the configuration file governing ``start``, if any.

    ``gpp.toml`` wins over ``pyproject.toml``; a ``pyproject.toml`` only counts
    when it has a ``[tool.gpp]`` section. Only ``start`` itself is searched.
    """
    candidate: Path = start / GPP_TOML_NAME
    if candidate.is_file():
        logger.debug("Discovered config file %s", candidate)
        return candidate

    candidate = start / PYPROJECT_TOML_NAME
    if candidate.is_file():
        try:
            data: TomlTable = load_toml_dict(candidate)
        except ConfigLoadError:
            # An unrelated, broken pyproject.toml does not stop preprocessing.
            return None
        if extract_gpp_table(candidate, data) is not None:
            logger.debug("Discovered config file %s", candidate)
            return candidate
    return None


# --- Unchecked getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        TomlTable: The sub-table, or an empty dict when missing or not a table.
    """
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.debug("Expected table for key %s, got %r; using empty table", key, value)
    return {}


# --- Checked getters ---


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected boolean in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected boolean in {loc}, got {type(value).__name__}: {value}")
    return None


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected string in {loc}, got {type(value).__name__}: {value}")
    return None


def get_defines_checked(
    table: TomlTable,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> dict[str, str]:
    """Return the ``[defines]`` table as macro name to replacement text.

    Scalars (``int``, ``float``, ``bool``) are coerced to strings; arrays and
    tables are skipped with a warning.
    """
    defines_tbl: TomlTable = get_table_value(table, Toml.SECTION_DEFINES)
    defines: dict[str, str] = {}
    for name, value in defines_tbl.items():
        if isinstance(value, bool):
            # TOML booleans render the way they were written.
            defines[name] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            defines[name] = str(value)
        else:
            loc: str = f"{where}.{Toml.SECTION_DEFINES}.{name}"
            logger.warning("Ignoring unsupported define value for %s: %r", loc, value)
            diagnostics.add_warning(
                f"Ignoring unsupported define value for {loc}: {type(value).__name__}"
            )
    return defines
