# topmark:header:start
#
#   project      : GPP
#   file         : test_io.py
#   file_relpath : tests/config/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML loading, config discovery and the checked getters in `gpp.config.io`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gpp.config.io import (
    ConfigLoadError,
    discover_config_file,
    extract_gpp_table,
    get_bool_value_or_none_checked,
    get_defines_checked,
    get_string_value_or_none_checked,
    load_toml_dict,
)
from gpp.core.diagnostics import DiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path


def test_load_toml_dict_returns_plain_dict(tmp_path: Path) -> None:
    path: Path = tmp_path / "gpp.toml"
    path.write_text("allow_exec = true\n[defines]\nA = 'x'\n", encoding="utf-8")
    data = load_toml_dict(path)
    assert data == {"allow_exec": True, "defines": {"A": "x"}}
    assert type(data["defines"]) is dict


def test_load_toml_dict_malformed(tmp_path: Path) -> None:
    path: Path = tmp_path / "gpp.toml"
    path.write_text("allow_exec = = true\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError) as info:
        load_toml_dict(path)
    assert info.value.path == path


def test_load_toml_dict_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError):
        load_toml_dict(tmp_path / "absent.toml")


def test_extract_gpp_table_from_pyproject(tmp_path: Path) -> None:
    path: Path = tmp_path / "pyproject.toml"
    data = {"tool": {"gpp": {"allow_exec": True}, "other": {}}}
    assert extract_gpp_table(path, data) == {"allow_exec": True}
    assert extract_gpp_table(path, {"project": {"name": "x"}}) is None


def test_extract_gpp_table_from_gpp_toml(tmp_path: Path) -> None:
    data = {"allow_exec": False}
    assert extract_gpp_table(tmp_path / "gpp.toml", data) is data


def test_discovery_prefers_gpp_toml(tmp_path: Path) -> None:
    (tmp_path / "gpp.toml").write_text("", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text("[tool.gpp]\n", encoding="utf-8")
    assert discover_config_file(tmp_path) == tmp_path / "gpp.toml"


def test_discovery_pyproject_needs_tool_section(tmp_path: Path) -> None:
    pyproject: Path = tmp_path / "pyproject.toml"
    pyproject.write_text("[project]\nname = 'x'\n", encoding="utf-8")
    assert discover_config_file(tmp_path) is None

    pyproject.write_text("[tool.gpp]\nallow_exec = false\n", encoding="utf-8")
    assert discover_config_file(tmp_path) == pyproject


def test_discovery_ignores_broken_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[[[", encoding="utf-8")
    assert discover_config_file(tmp_path) is None


def test_discovery_empty_directory(tmp_path: Path) -> None:
    assert discover_config_file(tmp_path) is None


def test_checked_getters_warn_on_wrong_type() -> None:
    diags = DiagnosticLog()
    table = {"allow_exec": "yes", "output": 5}
    assert get_bool_value_or_none_checked(table, "allow_exec", where="t", diagnostics=diags) is None
    assert get_string_value_or_none_checked(table, "output", where="t", diagnostics=diags) is None
    assert len(diags) == 2
    assert "t.allow_exec" in diags.items[0].message


def test_checked_getters_missing_keys_are_silent() -> None:
    diags = DiagnosticLog()
    assert get_bool_value_or_none_checked({}, "allow_exec", where="t", diagnostics=diags) is None
    assert get_string_value_or_none_checked({}, "output", where="t", diagnostics=diags) is None
    assert len(diags) == 0


def test_get_defines_checked_coerces_and_skips() -> None:
    diags = DiagnosticLog()
    table = {"defines": {"S": "s", "I": 1, "F": 1.5, "B": True, "L": [1, 2], "T": {"x": 1}}}
    defines = get_defines_checked(table, where="cfg", diagnostics=diags)
    assert defines == {"S": "s", "I": "1", "F": "1.5", "B": "true"}
    assert len(diags) == 2
