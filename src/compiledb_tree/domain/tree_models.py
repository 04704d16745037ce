from __future__ import annotations

"""
Compilation Database Tree Data Models.

Provides the record type parsed from the compilation database and the
structural nodes used to represent the reconstructed directory hierarchy.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

# -----------------------------------------------------------------------------
# DATABASE RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Record:
    """
    Represents one compiled-file entry of the compilation database.

    Only 'file' participates in tree construction. The remaining fields are
    opaque payload carried on the leaf node.

    Attributes:
        directory: Working directory of the compiler invocation.
        file: Path of the compiled source file (absolute in practice).
        target: Build target the invocation belongs to.
        command: Raw compiler invocation string.
        arguments: Tokenized invocation, when the database uses that form.
        output: Object file produced by the invocation.
    """
    directory: str
    file: str
    target: str = ""
    command: str = ""
    arguments: Tuple[str, ...] = ()
    output: str = ""

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class FileNode:
    """
    Leaf entry (source file) in the tree.

    Attributes:
        name: Final path component.
        absolute_path: Full path of the file as listed by the database.
        record: Database record the leaf was created from.
    """
    name: str
    absolute_path: str
    record: Optional[Record] = None

    @property
    def is_folder(self) -> bool:
        return False


@dataclass(eq=False)
class FolderNode:
    """
    Directory entry in the tree.

    Children keep first-seen insertion order and names are unique among
    siblings. Identity is preserved across insertions so that rendering
    consumers can key expansion state on the node object.

    Attributes:
        name: Single path segment.
        children: Ordered child nodes.
    """
    name: str
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return True


TreeNode = Union[FolderNode, FileNode]
Tree = List[TreeNode]
