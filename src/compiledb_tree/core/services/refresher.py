from __future__ import annotations

"""
Database Refresher.

Runs the load-and-rebuild cycle: locate the compilation database, parse it,
resolve every record and rebuild the tree from scratch. Optionally keeps a
watch on the database file and repeats the cycle whenever it changes.

Errors are contained at the refresh boundary. They are logged, published on
the 'error' channel and recorded in the RefreshResult; they never propagate
to tree queries or to the watch thread.
"""

import logging
import os
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from compiledb_tree.core.analysis.path_resolver import record_file_path, resolve_relative_path
from compiledb_tree.core.analysis.tree_builder import TreeBuilder
from compiledb_tree.core.services.database import load_records, require_database
from compiledb_tree.domain.constants import ANCHOR_PARENT, DEFAULT_DATABASE_CANDIDATES
from compiledb_tree.domain.errors import (
    DatabaseNotFoundError,
    DatabaseParseError,
    MalformedRecordError,
)
from compiledb_tree.domain.refresh_models import RefreshResult, RefreshState
from compiledb_tree.domain.tree_models import Record, TreeNode
from compiledb_tree.infra.events import ALL_NODES, EVENT_CHANGED, EVENT_ERROR, EventEmitter
from compiledb_tree.infra.watcher import DatabaseWatcher

logger = logging.getLogger(__name__)

WatcherFactory = Callable[[str, Callable[[], None]], DatabaseWatcher]


class DatabaseRefresher:
    """
    Keeps a TreeBuilder in sync with the compilation database of a project.

    Construction performs no I/O. Call 'initialize()' (or 'refresh()' and
    'watch()') to load, and 'dispose()' to release the watch. The object is
    also a context manager that disposes on exit.
    """

    def __init__(
            self,
            project_root: Optional[str],
            database_candidates: Optional[Iterable[str]] = None,
            path_anchor: str = ANCHOR_PARENT,
            watch_enabled: bool = False,
            emitter: Optional[EventEmitter] = None,
            watcher_factory: WatcherFactory = DatabaseWatcher,
    ):
        self.project_root = os.path.abspath(project_root) if project_root else None
        self.database_candidates = list(database_candidates or DEFAULT_DATABASE_CANDIDATES)
        self.path_anchor = path_anchor
        self.watch_enabled = watch_enabled

        self.state = RefreshState.UNRESOLVED
        self.database_path: Optional[str] = None
        self.last_result: Optional[RefreshResult] = None

        self._builder = TreeBuilder()
        self._emitter = emitter or EventEmitter()
        self._watcher_factory = watcher_factory
        self._watcher: Optional[DatabaseWatcher] = None
        self._watched_path: Optional[str] = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs: Any) -> DatabaseRefresher:
        """Build a refresher from a validated configuration dictionary."""
        return cls(
            project_root=config.get("project_root") or None,
            database_candidates=config.get("database_candidates"),
            path_anchor=config.get("path_anchor", ANCHOR_PARENT),
            watch_enabled=bool(config.get("watch", False)),
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def initialize(self) -> RefreshResult:
        """Run the first refresh, then start watching if enabled."""
        result = self.refresh()
        if self.watch_enabled:
            self.watch()
        return result

    def refresh(self) -> RefreshResult:
        """
        Rebuild the tree from the database.

        The visible tree is emptied first and the new tree is installed in
        one step at the end, so a failed load leaves an empty tree rather
        than a stale one. A 'changed' notification follows every cycle.
        When a watch is active and the database resolves to another
        candidate, the watch moves to the new file.

        Returns:
            RefreshResult: Outcome and counters of the cycle.
        """
        with self._lock:
            self._builder.reset()
            error: Optional[DatabaseParseError] = None
            try:
                result = self._load()
            except DatabaseParseError as e:
                logger.error(f"Failed to load compilation database: {e}")
                error = e
                result = RefreshResult(
                    ok=False,
                    state=self.state,
                    database_path=self.database_path,
                    error=str(e),
                )
            self.last_result = result
            stale = self._retarget_watch()

        if stale is not None:
            stale.stop()
        self._emitter.emit(EVENT_CHANGED, ALL_NODES)
        if error is not None:
            self._emitter.emit(EVENT_ERROR, error)
        return result

    def watch(self) -> bool:
        """
        Start watching the resolved database file.

        Only possible once a refresh has located the database; otherwise this
        is a silent no-op.

        Returns:
            bool: True if a watch is active after the call.
        """
        with self._lock:
            if self._watcher is not None:
                return True
            if self.database_path is None:
                logger.debug("No compilation database resolved; watch not established.")
                return False
            watcher = self._watcher_factory(self.database_path, self._on_database_changed)
            watcher.start()
            self._watcher = watcher
            self._watched_path = self.database_path
            return True

    def dispose(self) -> None:
        """Stop the watch and drop every subscriber. Safe to call repeatedly."""
        with self._lock:
            watcher, self._watcher = self._watcher, None
            self._watched_path = None
        try:
            if watcher is not None:
                watcher.stop()
        finally:
            self._emitter.clear()

    @property
    def is_watching(self) -> bool:
        return self._watcher is not None

    def __enter__(self) -> DatabaseRefresher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # -------------------------------------------------------------------------
    # QUERIES AND SUBSCRIPTIONS
    # -------------------------------------------------------------------------

    def get_children(self, node: Optional[TreeNode] = None) -> List[TreeNode]:
        return self._builder.get_children(node)

    @property
    def builder(self) -> TreeBuilder:
        return self._builder

    @property
    def emitter(self) -> EventEmitter:
        return self._emitter

    def on_changed(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe to tree replacement; returns an unsubscribe function."""
        return self._emitter.on(EVENT_CHANGED, callback)

    def on_error(self, callback: Callable[[DatabaseParseError], None]) -> Callable[[], None]:
        """Subscribe to refresh failures; returns an unsubscribe function."""
        return self._emitter.on(EVENT_ERROR, callback)

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _load(self) -> RefreshResult:
        if not self.project_root:
            logger.debug("Workspace unavailable; tree left empty.")
            return self._unresolved()

        try:
            path = require_database(self.project_root, self.database_candidates)
        except DatabaseNotFoundError as e:
            logger.info(str(e))
            return self._unresolved()

        self.database_path = path
        self.state = RefreshState.LOADED

        records = load_records(path)

        staging = TreeBuilder()
        skipped, merged = self._populate(staging, records)
        self._builder.adopt(staging)

        logger.info(
            f"Loaded {len(records)} records from {path}: "
            f"{staging.file_count()} files, {skipped} skipped, {merged} merged"
        )
        return RefreshResult(
            ok=True,
            state=self.state,
            database_path=path,
            records_total=len(records),
            files_inserted=staging.file_count(),
            records_skipped=skipped,
            records_merged=merged,
        )

    def _populate(self, builder: TreeBuilder, records: List[Record]) -> Tuple[int, int]:
        """Insert every record; returns (skipped, merged) counters."""
        skipped = merged = 0
        for record in records:
            try:
                file_path = record_file_path(record)
                resolved = resolve_relative_path(self.project_root, file_path, self.path_anchor)
            except MalformedRecordError as e:
                logger.debug(f"Skipping record: {e}")
                skipped += 1
                continue

            before = builder.file_count()
            leaf = builder.insert(resolved.segments, resolved.leaf_name, file_path, record)
            if leaf is None:
                skipped += 1
            elif builder.file_count() == before:
                merged += 1
        return skipped, merged

    def _retarget_watch(self) -> Optional[DatabaseWatcher]:
        """
        Move an active watch onto a newly resolved database path.

        Returns the replaced watcher, which the caller stops outside the lock.
        """
        if self._watcher is None or self.database_path is None:
            return None
        if self.database_path == self._watched_path:
            return None
        logger.info(f"Compilation database moved to {self.database_path}; following it.")
        stale, self._watcher = self._watcher, None
        self.watch()
        return stale

    def _unresolved(self) -> RefreshResult:
        self.state = RefreshState.UNRESOLVED
        self.database_path = None
        return RefreshResult(ok=True, state=self.state)

    def _on_database_changed(self) -> None:
        """Watch callback, invoked on the observer thread."""
        try:
            self.refresh()
        except Exception:
            logger.exception("Unexpected failure while refreshing after a database change.")
