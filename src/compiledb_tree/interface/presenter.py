from __future__ import annotations

"""
Tree Presenter.

Consumer-facing view of the explorer tree for a host UI: child queries,
node descriptions (label, icon, expansion state, open action), the
collapse/expand commands and delegation of 'open file' to the host.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from compiledb_tree.core.services.refresher import DatabaseRefresher
from compiledb_tree.domain import constants as const
from compiledb_tree.domain.refresh_models import RefreshResult
from compiledb_tree.domain.tree_models import FileNode, FolderNode, TreeNode
from compiledb_tree.infra.events import ALL_NODES, EVENT_CHANGED

logger = logging.getLogger(__name__)

FileOpener = Callable[[str], Any]

# -----------------------------------------------------------------------------
# VIEW MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class OpenCommand:
    """Action a host runs when a file item is activated."""
    name: str
    title: str
    arguments: Tuple[str, ...]


@dataclass(frozen=True)
class TreeItem:
    """
    Renderable description of one node.

    Attributes:
        label: Display text (the node name).
        icon: 'folder', 'file-code' or 'file'.
        collapsible: 'expanded', 'collapsed' or 'none'.
        tooltip: Absolute path for files, empty for folders.
        command: Open action for files.
    """
    label: str
    icon: str
    collapsible: str
    tooltip: str = ""
    command: Optional[OpenCommand] = None


def classify_icon(name: str) -> str:
    """Return the icon identifier for a file name."""
    _, ext = os.path.splitext(name)
    if ext.lower() in const.CODE_EXTENSIONS:
        return const.ICON_CODE
    return const.ICON_FILE

# -----------------------------------------------------------------------------
# PRESENTER
# -----------------------------------------------------------------------------

class TreePresenter:
    """Maps the refresher's tree to TreeItem values and host commands."""

    def __init__(self, refresher: DatabaseRefresher, file_opener: Optional[FileOpener] = None):
        self.refresher = refresher
        self.file_opener = file_opener
        self._folder_state = const.COLLAPSIBLE_EXPANDED

    def get_children(self, node: Optional[TreeNode] = None) -> List[TreeNode]:
        return self.refresher.get_children(node)

    def describe(self, node: TreeNode) -> TreeItem:
        if isinstance(node, FolderNode):
            return TreeItem(
                label=node.name,
                icon=const.ICON_FOLDER,
                collapsible=self._folder_state if node.children else const.COLLAPSIBLE_NONE,
            )

        return TreeItem(
            label=node.name,
            icon=classify_icon(node.name),
            collapsible=const.COLLAPSIBLE_NONE,
            tooltip=node.absolute_path,
            command=OpenCommand(
                name=const.OPEN_FILE_COMMAND,
                title="Open File",
                arguments=(node.absolute_path,),
            ),
        )

    # -------------------------------------------------------------------------
    # COMMANDS
    # -------------------------------------------------------------------------

    def refresh(self) -> RefreshResult:
        return self.refresher.refresh()

    def collapse_all(self) -> None:
        """Describe folders as collapsed from now on. The tree is not rebuilt."""
        self._set_folder_state(const.COLLAPSIBLE_COLLAPSED)

    def expand_all(self) -> None:
        self._set_folder_state(const.COLLAPSIBLE_EXPANDED)

    def open_file(self, absolute_path: str) -> bool:
        """
        Ask the host to open a file.

        Returns:
            bool: False when no opener is installed or the opener failed.
        """
        if self.file_opener is None:
            logger.warning(f"No file opener available for: {absolute_path}")
            return False
        try:
            self.file_opener(absolute_path)
        except Exception as e:
            logger.error(f"Failed to open '{absolute_path}': {e}")
            return False
        return True

    def open_node(self, node: TreeNode) -> bool:
        if not isinstance(node, FileNode):
            return False
        return self.open_file(node.absolute_path)

    def _set_folder_state(self, state: str) -> None:
        self._folder_state = state
        self.refresher.emitter.emit(EVENT_CHANGED, ALL_NODES)
