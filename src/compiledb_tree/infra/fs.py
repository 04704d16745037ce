from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path normalization, application data directory
resolution and the database location probe. Acts as an abstraction over the
'os' module so that the tree-building core never touches the filesystem.
"""

import os
from typing import Iterable, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CompileDbTree"
UNIX_APP_DIR_NAME = ".compiledb_tree"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/CompileDbTree
    - Linux/Mac: ~/.compiledb_tree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DATABASE LOCATION
# -----------------------------------------------------------------------------

def find_first_existing(root: str, candidates: Iterable[str]) -> Optional[str]:
    """
    Return the first candidate (relative to root) that exists as a file.

    Args:
        root: Directory the candidates are relative to.
        candidates: Relative paths in precedence order.

    Returns:
        Optional[str]: Absolute path of the first hit, or None.
    """
    for rel in candidates:
        full = os.path.normpath(os.path.join(root, rel))
        if os.path.isfile(full):
            return full
    return None
