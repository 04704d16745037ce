from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies default generation and JSON persistence against a temporary
config file.
"""

import json
from pathlib import Path
from unittest.mock import patch

from compiledb_tree.domain import config as config_mod
from compiledb_tree.domain.config import get_default_config, load_config, save_config


def test_default_config_keys() -> None:
    cfg = get_default_config()
    assert set(cfg) == {
        "project_root", "database_candidates", "path_anchor",
        "watch", "log_level", "log_file",
    }


def test_default_candidates_are_independent_copies() -> None:
    a = get_default_config()
    a["database_candidates"].append("x.json")
    assert "x.json" not in get_default_config()["database_candidates"]


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    with patch.object(config_mod, "CONFIG_FILE", str(tmp_path / "missing.json")):
        assert load_config() == get_default_config()


def test_save_then_load(tmp_path: Path) -> None:
    target = tmp_path / "cfg" / "config.json"
    with patch.object(config_mod, "CONFIG_FILE", str(target)):
        cfg = get_default_config()
        cfg["path_anchor"] = "root"
        cfg["watch"] = True
        save_config(cfg)

        stored = json.loads(target.read_text(encoding="utf-8"))
        assert stored["version"] == config_mod.CURRENT_CONFIG_VERSION

        loaded = load_config()
        assert loaded["path_anchor"] == "root"
        assert loaded["watch"] is True


def test_load_ignores_unknown_keys(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text(json.dumps({"settings": {"watch": True, "theme": "dark"}}), encoding="utf-8")
    with patch.object(config_mod, "CONFIG_FILE", str(target)):
        loaded = load_config()
    assert loaded["watch"] is True
    assert "theme" not in loaded


def test_load_corrupted_file_returns_defaults(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text("{oops", encoding="utf-8")
    with patch.object(config_mod, "CONFIG_FILE", str(target)):
        assert load_config()["path_anchor"] == "parent"

    target.write_text("[1, 2]", encoding="utf-8")
    with patch.object(config_mod, "CONFIG_FILE", str(target)):
        assert load_config()["watch"] is False
