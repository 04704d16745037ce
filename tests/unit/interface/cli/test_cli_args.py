from __future__ import annotations

"""
Unit tests for CLI argument parsing and override mapping.
"""

import pytest

from compiledb_tree.interface.cli.args import args_to_overrides, build_parser

BASE = {"database_candidates": ["compile_commands.json", "build/compile_commands.json"]}


def test_no_arguments_produce_no_overrides() -> None:
    args = build_parser().parse_args([])
    assert args_to_overrides(args, BASE) == {}


def test_full_mapping() -> None:
    args = build_parser().parse_args(["-r", "/p", "--anchor", "root", "--watch", "--debug"])
    overrides = args_to_overrides(args, BASE)

    assert overrides == {
        "project_root": "/p",
        "path_anchor": "root",
        "watch": True,
        "log_level": "DEBUG",
    }


def test_db_option_takes_precedence() -> None:
    args = build_parser().parse_args(["--db", "out/compile_commands.json"])
    overrides = args_to_overrides(args, BASE)

    assert overrides["database_candidates"] == [
        "out/compile_commands.json",
        "compile_commands.json",
        "build/compile_commands.json",
    ]


def test_db_option_not_duplicated() -> None:
    args = build_parser().parse_args(["--db", "build/compile_commands.json"])
    overrides = args_to_overrides(args, BASE)

    assert overrides["database_candidates"] == [
        "build/compile_commands.json",
        "compile_commands.json",
    ]


def test_invalid_anchor_rejected() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--anchor", "sideways"])
