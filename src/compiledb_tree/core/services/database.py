from __future__ import annotations

"""
Compilation Database Loader.

Locates the compilation database under a project root and parses it into
Record values. Parsing is all-or-nothing: any schema violation aborts the
load with DatabaseParseError so that no partial tree is ever built.
"""

import json
import logging
from typing import Any, Iterable, List, Optional

from compiledb_tree.domain.constants import DEFAULT_DATABASE_CANDIDATES
from compiledb_tree.domain.errors import DatabaseNotFoundError, DatabaseParseError
from compiledb_tree.domain.tree_models import Record
from compiledb_tree.infra.fs import find_first_existing

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("directory", "file", "target", "command", "output")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def locate_database(
        project_root: str,
        candidates: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """
    Return the first existing database path among the candidates.

    Args:
        project_root: Directory the candidates are relative to.
        candidates: Relative paths in precedence order. Defaults to the
            project root first, then the 'build/' directory.

    Returns:
        Optional[str]: Absolute path of the database, or None.
    """
    found = find_first_existing(project_root, candidates or DEFAULT_DATABASE_CANDIDATES)
    if found:
        logger.debug(f"Compilation database located at {found}")
    else:
        logger.debug(f"No compilation database under {project_root}")
    return found


def require_database(
        project_root: str,
        candidates: Optional[Iterable[str]] = None,
) -> str:
    """
    Like 'locate_database', but a missing database is an error.

    Raises:
        DatabaseNotFoundError: If none of the candidates exists.
    """
    tried = list(candidates or DEFAULT_DATABASE_CANDIDATES)
    found = locate_database(project_root, tried)
    if found is None:
        raise DatabaseNotFoundError(
            f"No compilation database under {project_root} (tried: {', '.join(tried)})"
        )
    return found


def load_records(path: str) -> List[Record]:
    """
    Read and parse the database file at 'path'.

    Raises:
        DatabaseParseError: If the file cannot be read or is not a valid
            compilation database.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DatabaseParseError(path, f"cannot read file ({e})", e) from e

    return parse_records(text, source=path)


def parse_records(text: str, source: str = "<string>") -> List[Record]:
    """
    Parse compilation database JSON text into Record values.

    The document must be an array of objects. Known fields must be strings
    ('arguments' a list of strings); unknown fields are ignored. Entries
    without a 'file' field are kept with an empty path and are skipped later
    during tree construction.

    Args:
        text: JSON document.
        source: Name used in error messages.

    Returns:
        List[Record]: Records in document order.

    Raises:
        DatabaseParseError: On invalid JSON or schema violations.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DatabaseParseError(source, f"invalid JSON ({e})", e) from e

    if not isinstance(data, list):
        raise DatabaseParseError(
            source, f"expected a JSON array, found {type(data).__name__}"
        )

    return [_to_record(entry, i, source) for i, entry in enumerate(data)]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_record(entry: Any, index: int, source: str) -> Record:
    """Validate one array element and convert it to a Record."""
    if not isinstance(entry, dict):
        raise DatabaseParseError(
            source, f"entry {index}: expected an object, found {type(entry).__name__}"
        )

    values = {}
    for field in _STRING_FIELDS:
        value = entry.get(field, "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise DatabaseParseError(
                source, f"entry {index}: field '{field}' must be a string"
            )
        values[field] = value

    arguments = entry.get("arguments", [])
    if not isinstance(arguments, list) or not all(isinstance(a, str) for a in arguments):
        raise DatabaseParseError(
            source, f"entry {index}: field 'arguments' must be a list of strings"
        )

    return Record(arguments=tuple(arguments), **values)
