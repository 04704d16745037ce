from __future__ import annotations

"""
Domain Error Taxonomy.

Exceptions raised by the resolution, loading and building layers. The
refresh boundary catches them and converts them into logged diagnostics
and error notifications, so none of them ever reaches a tree query.
"""

from typing import Optional


class CompileDbTreeError(Exception):
    """Base class for every error raised by this package."""


class WorkspaceUnavailableError(CompileDbTreeError):
    """No project root is known; the tree stays empty."""


class DatabaseNotFoundError(CompileDbTreeError):
    """None of the candidate database locations exists."""


class DatabaseParseError(CompileDbTreeError):
    """
    The database file exists but its content is not a valid compilation database.

    Attributes:
        path: Database file that failed to parse.
        cause: Underlying exception, when there is one.
    """

    def __init__(self, path: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
        self.cause = cause


class MalformedRecordError(CompileDbTreeError):
    """A single record cannot be placed in the tree and is skipped."""
