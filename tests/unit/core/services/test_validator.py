from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Default value injection.
2. Type coercion (String to Bool/List).
3. Domain normalization of the root path and anchor.
4. Strict mode validation.
"""

import os

import pytest

from compiledb_tree.core.services.validator import validate_config


def test_validate_none_returns_defaults() -> None:
    cfg, warnings = validate_config(None)

    assert cfg["path_anchor"] == "parent"
    assert cfg["database_candidates"] == ["compile_commands.json", "build/compile_commands.json"]
    assert cfg["watch"] is False
    assert len(warnings) > 0


def test_validate_empty_dict_returns_defaults() -> None:
    cfg, warnings = validate_config({})

    assert cfg["project_root"] == os.path.abspath(os.getcwd())
    assert cfg["log_level"] == "INFO"
    assert warnings == []


def test_validate_coerces_strings() -> None:
    cfg, warnings = validate_config({
        "watch": "yes",
        "database_candidates": "out/compile_commands.json, compile_commands.json",
        "log_level": "debug",
    })

    assert cfg["watch"] is True
    assert cfg["database_candidates"] == ["out/compile_commands.json", "compile_commands.json"]
    assert cfg["log_level"] == "DEBUG"
    assert len(warnings) == 2


def test_validate_invalid_anchor_falls_back() -> None:
    cfg, warnings = validate_config({"path_anchor": "sideways"})
    assert cfg["path_anchor"] == "parent"
    assert any("path_anchor" in w for w in warnings)


def test_validate_anchor_case_insensitive() -> None:
    cfg, _ = validate_config({"path_anchor": "ROOT"})
    assert cfg["path_anchor"] == "root"


def test_validate_project_root_normalized(tmp_path) -> None:
    cfg, _ = validate_config({"project_root": str(tmp_path / "a" / ".." / "b")})
    assert cfg["project_root"] == str(tmp_path / "b")


def test_validate_discards_bad_list_items() -> None:
    cfg, warnings = validate_config({"database_candidates": ["a.json", 3, " "]})
    assert cfg["database_candidates"] == ["a.json"]
    assert len(warnings) == 1


def test_strict_mode_raises() -> None:
    with pytest.raises(TypeError):
        validate_config({"watch": "maybe"}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"path_anchor": "sideways"}, strict=True)
    with pytest.raises(TypeError):
        validate_config([], strict=True)
