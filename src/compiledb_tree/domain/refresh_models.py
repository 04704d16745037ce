from __future__ import annotations

"""
Refresh Domain Data Models.

Defines the lifecycle states of the explorer and the result object returned
by every refresh cycle to the interface layers.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RefreshState(str, Enum):
    """
    UNRESOLVED: no project root, or no database at any candidate location.
    LOADED: a database was located; the tree reflects its latest load.
    """
    UNRESOLVED = "unresolved"
    LOADED = "loaded"


@dataclass(frozen=True)
class RefreshResult:
    """
    Outcome of one load-and-rebuild cycle.

    Attributes:
        ok: False only when the database could not be parsed.
        state: Explorer state after the cycle.
        database_path: Database that was loaded, if any.
        records_total: Number of records in the database.
        files_inserted: Number of leaves in the new tree.
        records_skipped: Records that could not be placed in the tree.
        records_merged: Records naming a file already in the tree.
        error: Description of the failure when ok is False.
    """
    ok: bool
    state: RefreshState
    database_path: Optional[str] = None
    records_total: int = 0
    files_inserted: int = 0
    records_skipped: int = 0
    records_merged: int = 0
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["state"] = self.state.value
        return data
