from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures that lay out a project with a compilation database.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory named 'proj' inside the pytest temp dir."""
    root = tmp_path / "proj"
    root.mkdir()
    return root


@pytest.fixture
def make_entry() -> Callable[..., Dict[str, Any]]:
    """Factory for one compilation database entry."""
    def _make(file: str, directory: str = "/tmp/build", target: str = "app") -> Dict[str, Any]:
        return {
            "directory": directory,
            "file": file,
            "target": target,
            "command": f"cc -c {file}",
        }
    return _make


@pytest.fixture
def write_database() -> Callable[..., Path]:
    """
    Write a compile_commands.json below a project root.

    Usage: write_database(root, entries, subdir="build")
    """
    def _write(root: Path, entries: List[Dict[str, Any]] | str, subdir: str = "") -> Path:
        target_dir = root / subdir if subdir else root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / "compile_commands.json"
        content = entries if isinstance(entries, str) else json.dumps(entries)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
