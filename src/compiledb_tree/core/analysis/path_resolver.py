from __future__ import annotations

"""
Path Resolver.

Maps an absolute source path onto its position in the explorer tree: the
ordered folder segments plus the leaf name. Resolution is pure string
manipulation and never consults the filesystem.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from compiledb_tree.domain.constants import ANCHOR_PARENT, ANCHOR_ROOT, PATH_ANCHORS
from compiledb_tree.domain.errors import MalformedRecordError, WorkspaceUnavailableError
from compiledb_tree.domain.tree_models import Record

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolvedPath:
    """
    Position of a file relative to the anchor directory.

    Attributes:
        segments: Directory components. The first one is the empty string
            produced by the leading separator and stands for the anchor.
        leaf_name: Final path component.
    """
    segments: Tuple[str, ...]
    leaf_name: str

    @property
    def folders(self) -> Tuple[str, ...]:
        """Directory components without the leading anchor marker."""
        if self.segments and self.segments[0] == "":
            return self.segments[1:]
        return self.segments

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_relative_path(
        project_root: Optional[str],
        file_path: str,
        anchor: str = ANCHOR_PARENT,
) -> ResolvedPath:
    """
    Compute the tree position of 'file_path'.

    With the 'parent' anchor the path is taken relative to the parent of the
    project root, so the project directory itself becomes the first folder
    and sibling directories sit next to it. With the 'root' anchor the
    project root's children are the first folders.

    A leading separator is prepended when missing, which turns escapes such
    as '../include/x.h' into '/../include/x.h' instead of rejecting them.

    Args:
        project_root: Absolute project directory.
        file_path: Absolute path of the source file.
        anchor: Either 'parent' or 'root'.

    Returns:
        ResolvedPath: Segments and leaf name.

    Raises:
        WorkspaceUnavailableError: If no project root is given.
        MalformedRecordError: If the path is empty or has no file component.
    """
    if not project_root:
        raise WorkspaceUnavailableError("No project root available.")
    if anchor not in PATH_ANCHORS:
        raise ValueError(f"Unknown path anchor '{anchor}'.")
    if not file_path:
        raise MalformedRecordError("Empty file path.")

    root = os.path.normpath(project_root)
    base = root if anchor == ANCHOR_ROOT else os.path.dirname(root)

    relative = _relative_to(file_path, base)
    if not relative.startswith(os.sep):
        relative = os.sep + relative

    parts = relative.split(os.sep)
    leaf_name = parts[-1]
    if leaf_name in ("", ".", ".."):
        raise MalformedRecordError(f"No file component in '{file_path}'.")

    return ResolvedPath(segments=tuple(parts[:-1]), leaf_name=leaf_name)


def record_file_path(record: Record) -> str:
    """
    Return the absolute path a record refers to.

    Relative 'file' entries are interpreted against the record's working
    directory. Absolute entries are returned unchanged.

    Raises:
        MalformedRecordError: If 'file' is relative and no directory is given.
    """
    if not record.file:
        return ""
    if os.path.isabs(record.file):
        return record.file
    if not record.directory:
        raise MalformedRecordError(f"Relative path '{record.file}' without a directory.")
    return os.path.normpath(os.path.join(record.directory, record.file))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _relative_to(path: str, base: str) -> str:
    """Relative path from base to path, or the drive-less path across drives."""
    try:
        return os.path.relpath(path, base)
    except ValueError:
        # Windows: different drives have no relative form
        return os.path.splitdrive(os.path.normpath(path))[1]
