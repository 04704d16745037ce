from __future__ import annotations

"""
Tree Renderer.

Converts the explorer tree into text lines with box-drawing connectors, for
terminal display.
"""

from typing import List, Sequence

from compiledb_tree.domain.tree_models import FolderNode, TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(nodes: Sequence[TreeNode], sort: bool = False) -> List[str]:
    """
    Render a tree level (and everything below it) as text lines.

    Args:
        nodes: Root-level nodes.
        sort: Order siblings folders-first, then by name, instead of
            insertion order.

    Returns:
        List[str]: One line per node.
    """
    lines: List[str] = []
    _render_level(nodes, lines, prefix="", sort=sort)
    return lines


def _render_level(
        nodes: Sequence[TreeNode],
        lines: List[str],
        prefix: str,
        sort: bool,
) -> None:
    entries = _ordered(nodes) if sort else list(nodes)
    total = len(entries)

    for i, node in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if isinstance(node, FolderNode):
            lines.append(f"{prefix}{connector}{node.name}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_level(node.children, lines, new_prefix, sort)
            continue

        lines.append(f"{prefix}{connector}{node.name}")


def _ordered(nodes: Sequence[TreeNode]) -> List[TreeNode]:
    return sorted(nodes, key=lambda n: (not isinstance(n, FolderNode), n.name))
