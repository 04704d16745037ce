from __future__ import annotations

"""
Unit tests for the Compilation Database Loader.

Verifies candidate precedence, record parsing, and rejection of documents
that do not follow the compilation database schema.
"""

import json
from pathlib import Path

import pytest

from compiledb_tree.core.services.database import (
    load_records,
    locate_database,
    parse_records,
    require_database,
)
from compiledb_tree.domain.errors import DatabaseNotFoundError, DatabaseParseError
from compiledb_tree.domain.tree_models import Record

# -----------------------------------------------------------------------------
# LOCATION TESTS
# -----------------------------------------------------------------------------

def test_locate_prefers_project_root(project_root: Path, write_database) -> None:
    direct = write_database(project_root, [])
    write_database(project_root, [], subdir="build")

    assert locate_database(str(project_root)) == str(direct)


def test_locate_falls_back_to_build_dir(project_root: Path, write_database) -> None:
    fallback = write_database(project_root, [], subdir="build")
    assert locate_database(str(project_root)) == str(fallback)


def test_locate_returns_none_when_absent(project_root: Path) -> None:
    assert locate_database(str(project_root)) is None


def test_locate_ignores_directory_with_database_name(project_root: Path) -> None:
    (project_root / "compile_commands.json").mkdir()
    assert locate_database(str(project_root)) is None


def test_locate_custom_candidates(project_root: Path, write_database) -> None:
    custom = write_database(project_root, [], subdir="out/debug")
    found = locate_database(str(project_root), ["missing.json", "out/debug/compile_commands.json"])
    assert found == str(custom)


def test_require_returns_located_path(project_root: Path, write_database) -> None:
    path = write_database(project_root, "[]", subdir="build")
    assert require_database(str(project_root)) == str(path)


def test_require_raises_when_absent(project_root: Path) -> None:
    with pytest.raises(DatabaseNotFoundError, match="build/compile_commands.json"):
        require_database(str(project_root))


# -----------------------------------------------------------------------------
# PARSING TESTS
# -----------------------------------------------------------------------------

def test_parse_full_records() -> None:
    text = json.dumps([
        {"directory": "/b", "file": "/p/a.c", "target": "app", "command": "cc -c a.c"},
        {"directory": "/b", "file": "/p/b.c", "arguments": ["cc", "-c", "b.c"], "output": "b.o"},
    ])
    records = parse_records(text)

    assert records[0] == Record(directory="/b", file="/p/a.c", target="app", command="cc -c a.c")
    assert records[1].arguments == ("cc", "-c", "b.c")
    assert records[1].output == "b.o"
    assert records[1].command == ""


def test_parse_ignores_unknown_fields() -> None:
    records = parse_records('[{"directory": "/b", "file": "/p/a.c", "extra": 1}]')
    assert records[0].file == "/p/a.c"


def test_parse_missing_file_kept_empty() -> None:
    records = parse_records('[{"directory": "/b", "command": "cc"}]')
    assert records[0].file == ""


def test_parse_empty_array() -> None:
    assert parse_records("[]") == []


@pytest.mark.parametrize("text", [
    "{not json",
    '{"file": "/p/a.c"}',
    '["/p/a.c"]',
    '[{"file": 42}]',
    '[{"file": "/p/a.c", "arguments": "cc -c"}]',
])
def test_parse_rejects_invalid_documents(text: str) -> None:
    with pytest.raises(DatabaseParseError):
        parse_records(text, source="db.json")


def test_parse_error_carries_path() -> None:
    with pytest.raises(DatabaseParseError) as info:
        parse_records("[", source="/p/compile_commands.json")

    assert info.value.path == "/p/compile_commands.json"
    assert info.value.cause is not None


def test_load_records_from_file(project_root: Path, write_database, make_entry) -> None:
    path = write_database(project_root, [make_entry("/p/a.c"), make_entry("/p/b.c")])
    records = load_records(str(path))
    assert [r.file for r in records] == ["/p/a.c", "/p/b.c"]


def test_load_records_invalid_encoding(project_root: Path) -> None:
    path = project_root / "compile_commands.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(DatabaseParseError):
        load_records(str(path))


def test_load_records_missing_file(project_root: Path) -> None:
    with pytest.raises(DatabaseParseError):
        load_records(str(project_root / "nope.json"))
