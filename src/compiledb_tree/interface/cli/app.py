from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, stored settings, command-line overrides), the first refresh, and
rendering. In watch mode the tree is printed again after every change until
the process is interrupted.
"""

import json
import os
import sys
import threading
from typing import Any, Dict, List, Optional

from compiledb_tree.core.analysis.tree_renderer import render_tree
from compiledb_tree.core.services.refresher import DatabaseRefresher
from compiledb_tree.core.services.validator import validate_config
from compiledb_tree.domain.config import get_default_config, load_config
from compiledb_tree.domain.errors import DatabaseParseError
from compiledb_tree.domain.refresh_models import RefreshResult, RefreshState
from compiledb_tree.infra.logging import LoggingConfig, configure_logging, get_logger
from compiledb_tree.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stop_event: Optional[threading.Event] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stop_event: Ends watch mode when set (Ctrl+C otherwise).

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args, base_conf))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=conf["log_file"] or None,
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return 0

    project_root = conf["project_root"]
    if not os.path.isdir(project_root):
        logger.error(f"Project root does not exist: {project_root}")
        print(f"ERROR: project root does not exist: {project_root}", file=sys.stderr)
        return 2

    # 3. Load, render, optionally watch
    watching = conf["watch"]
    with DatabaseRefresher.from_config(conf) as refresher:
        if watching:
            # Every refresh, the initial one included, is printed by the subscriber
            refresher.on_changed(
                lambda _marker: _print_tree(refresher, refresher.last_result, args.json_output, args.sort)
            )
            refresher.on_error(_report_error)

        result = refresher.initialize()

        if not watching:
            _print_tree(refresher, result, args.json_output, args.sort)
            return 0 if result.ok else 1

        if not refresher.is_watching:
            print("No compilation database to watch.", file=sys.stderr)
            return 0 if result.ok else 1

        stop = stop_event or threading.Event()
        try:
            while not stop.wait(0.5):
                pass
        except KeyboardInterrupt:
            logger.info("Watch interrupted by user.")
            return 130

    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_tree(
        refresher: DatabaseRefresher,
        result: Optional[RefreshResult],
        json_output: bool,
        sort: bool,
) -> None:
    """Print the current tree in text or JSON form."""
    if json_output:
        payload: Dict[str, Any] = {
            "result": result.to_dict() if result else None,
            "tree": refresher.builder.snapshot(),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2), flush=True)
        return

    if result is None:
        return
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr, flush=True)
        return
    if result.state == RefreshState.UNRESOLVED:
        print("No compilation database found.", flush=True)
        return

    print(result.database_path)
    for line in render_tree(refresher.get_children(), sort=sort):
        print(line)
    print(
        f"\n{result.files_inserted} files "
        f"({result.records_skipped} skipped, {result.records_merged} merged)",
        flush=True,
    )


def _report_error(error: DatabaseParseError) -> None:
    logger.debug(f"Refresh failed for {error.path}: {error.message}")


if __name__ == "__main__":
    sys.exit(main())
