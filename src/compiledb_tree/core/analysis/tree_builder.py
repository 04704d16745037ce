from __future__ import annotations

"""
Tree Builder.

Owns the in-memory explorer tree and merges inserted files on their shared
directory prefixes, so that files of one directory become siblings under a
single folder node.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from compiledb_tree.domain.tree_models import FileNode, FolderNode, Record, Tree, TreeNode

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Accumulates files into a tree of FolderNode / FileNode values.

    The root level is a plain list: there is no synthetic root node.
    """

    def __init__(self) -> None:
        self._roots: Tree = []
        self._file_count = 0

    # -------------------------------------------------------------------------
    # MUTATION
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Discard every node. A fresh list is installed, so views handed out earlier stay intact."""
        self._roots = []
        self._file_count = 0

    def insert(
            self,
            segments: Sequence[str],
            leaf_name: str,
            absolute_path: str,
            record: Optional[Record] = None,
    ) -> Optional[FileNode]:
        """
        Place one file in the tree.

        Folders along 'segments' are found or created; existing folder nodes
        are reused as-is. A leading empty segment (the anchor produced by the
        resolver's leading separator) is dropped before the walk.

        Args:
            segments: Directory components, root first.
            leaf_name: File name.
            absolute_path: Full path stored on the leaf.
            record: Database record stored on the leaf.

        Returns:
            Optional[FileNode]: The new leaf, the already present leaf when
            the same position was inserted before, or None when the entry
            had to be skipped.
        """
        folders = list(segments)
        if folders and folders[0] == "":
            folders = folders[1:]

        if not leaf_name:
            logger.debug(f"Skipping entry without file name: segments={folders!r}")
            return None

        level = self._roots
        for name in folders:
            node = _find(level, name)
            if node is None:
                node = FolderNode(name=name)
                level.append(node)
            elif not isinstance(node, FolderNode):
                logger.warning(f"Skipping '{absolute_path}': '{name}' is already a file.")
                return None
            level = node.children

        existing = _find(level, leaf_name)
        if isinstance(existing, FileNode):
            logger.debug(f"Duplicate entry merged: {absolute_path}")
            return existing
        if existing is not None:
            logger.warning(f"Skipping '{absolute_path}': '{leaf_name}' is already a folder.")
            return None

        leaf = FileNode(name=leaf_name, absolute_path=absolute_path, record=record)
        level.append(leaf)
        self._file_count += 1
        return leaf

    def adopt(self, other: TreeBuilder) -> None:
        """Install the tree of 'other' in a single reference swap."""
        self._roots = other._roots
        self._file_count = other._file_count

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def get_children(self, node: Optional[TreeNode] = None) -> List[TreeNode]:
        """
        Return the children of 'node', or the root level when node is None.

        Files have no children. The returned list is a copy.
        """
        if node is None:
            return list(self._roots)
        if isinstance(node, FolderNode):
            return list(node.children)
        return []

    def file_count(self) -> int:
        return self._file_count

    def walk(self) -> Iterator[Tuple[Tuple[str, ...], TreeNode]]:
        """
        Depth-first, pre-order iteration.

        Yields:
            (ancestor folder names, node) pairs.
        """
        stack: List[Tuple[Tuple[str, ...], TreeNode]] = [((), n) for n in reversed(self._roots)]
        while stack:
            parents, node = stack.pop()
            yield parents, node
            if isinstance(node, FolderNode):
                path = parents + (node.name,)
                stack.extend((path, child) for child in reversed(node.children))

    def find(self, names: Sequence[str]) -> Optional[TreeNode]:
        """Follow 'names' from the root level; None when any step is missing."""
        level = self._roots
        node: Optional[TreeNode] = None
        for name in names:
            node = _find(level, name)
            if node is None:
                return None
            level = node.children if isinstance(node, FolderNode) else []
        return node

    def snapshot(self) -> List[Dict[str, Any]]:
        """Return a JSON-friendly copy of the tree."""
        return [_node_to_dict(n) for n in self._roots]


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _find(level: List[TreeNode], name: str) -> Optional[TreeNode]:
    for node in level:
        if node.name == name:
            return node
    return None


def _node_to_dict(node: TreeNode) -> Dict[str, Any]:
    if isinstance(node, FolderNode):
        return {
            "name": node.name,
            "type": "folder",
            "children": [_node_to_dict(c) for c in node.children],
        }
    return {"name": node.name, "type": "file", "path": node.absolute_path}
