from __future__ import annotations

"""
Domain Constants.

Database file locations, path anchoring modes, and the extension table used
to classify leaves for presentation.
"""

from typing import FrozenSet, List

CURRENT_CONFIG_VERSION = "1.0.0"

DATABASE_FILE_NAME = "compile_commands.json"

# Checked in order: project root first, then the conventional build directory
DEFAULT_DATABASE_CANDIDATES: List[str] = [
    DATABASE_FILE_NAME,
    "build/" + DATABASE_FILE_NAME,
]

ANCHOR_PARENT = "parent"
ANCHOR_ROOT = "root"
PATH_ANCHORS = (ANCHOR_PARENT, ANCHOR_ROOT)

CODE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".c", ".cc", ".cpp", ".cxx",
    ".h", ".hh", ".hpp", ".hxx",
})

# -----------------------------------------------------------------------------
# PRESENTATION IDENTIFIERS
# -----------------------------------------------------------------------------

ICON_FOLDER = "folder"
ICON_CODE = "file-code"
ICON_FILE = "file"

COLLAPSIBLE_NONE = "none"
COLLAPSIBLE_EXPANDED = "expanded"
COLLAPSIBLE_COLLAPSED = "collapsed"

OPEN_FILE_COMMAND = "compiledb_tree.openFile"
