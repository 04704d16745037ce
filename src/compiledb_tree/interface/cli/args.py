from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict

from compiledb_tree.domain.constants import PATH_ANCHORS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the compiledb-tree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="compiledb-tree",
        description="Show the source files of a compile_commands.json database as a directory tree.",
    )

    # --- Workspace ---
    p.add_argument(
        "-r", "--root",
        dest="project_root",
        default=None,
        help="Project root directory (default: current directory).",
    )
    p.add_argument(
        "--db",
        dest="database",
        default=None,
        help="Extra database location, relative to the root; checked before the defaults.",
    )
    p.add_argument(
        "--anchor",
        dest="path_anchor",
        choices=PATH_ANCHORS,
        default=None,
        help="Place files relative to the root's parent (default) or the root itself.",
    )

    # --- Display ---
    p.add_argument(
        "--sort",
        action="store_true",
        help="List folders first and sort by name instead of database order.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the tree and refresh summary as JSON.",
    )

    # --- Synchronization ---
    p.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and print the tree again whenever the database changes.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the stored configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace, base: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.
        base: Configuration the overrides apply to (used to extend the
            candidate list).

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.project_root:
        overrides["project_root"] = args.project_root
    if args.path_anchor:
        overrides["path_anchor"] = args.path_anchor
    if args.watch:
        overrides["watch"] = True
    if args.debug:
        overrides["log_level"] = "DEBUG"

    if args.database:
        existing = [c for c in base.get("database_candidates", []) if c != args.database]
        overrides["database_candidates"] = [args.database] + existing

    return overrides
