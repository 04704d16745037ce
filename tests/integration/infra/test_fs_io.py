from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution, and the database
location probe.
"""

import os
from pathlib import Path
from unittest.mock import patch

from compiledb_tree.infra.fs import find_first_existing, get_user_data_dir, normalize_path

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_unix() -> None:
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            with patch("os.makedirs"):
                path = get_user_data_dir()
    assert path.replace("\\", "/").endswith("/home/testuser/.compiledb_tree")


def test_get_user_data_dir_windows() -> None:
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
    assert "CompileDbTree" in path


def test_normalize_path_expansion() -> None:
    with patch.dict(os.environ, {"CDB_TEST_VAR": "my_folder"}):
        path = normalize_path("$CDB_TEST_VAR/sub", fallback=".")
    assert path.endswith(os.path.join("my_folder", "sub"))
    assert os.path.isabs(path)


def test_normalize_path_fallback() -> None:
    assert normalize_path("  ", fallback="/tmp") == os.path.abspath("/tmp")
    assert normalize_path(None, fallback="/tmp") == os.path.abspath("/tmp")

# -----------------------------------------------------------------------------
# DATABASE PROBE TESTS
# -----------------------------------------------------------------------------

def test_find_first_existing_order(tmp_path: Path) -> None:
    (tmp_path / "b.json").write_text("[]")
    (tmp_path / "c.json").write_text("[]")

    found = find_first_existing(str(tmp_path), ["a.json", "b.json", "c.json"])
    assert found == str(tmp_path / "b.json")


def test_find_first_existing_none(tmp_path: Path) -> None:
    assert find_first_existing(str(tmp_path), ["a.json"]) is None
    assert find_first_existing(str(tmp_path), []) is None
