from __future__ import annotations

"""
Database File Watcher.

Watchdog-based monitoring of a single file. The observer watches the file's
parent directory non-recursively, because build tools commonly rewrite the
database by creating a temporary file and renaming it over the old one.
"""

import logging
import os
import threading
from typing import Callable, Optional

from watchdog.events import (
    FileSystemEvent,
    FileSystemEventHandler,
    FileSystemMovedEvent,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class DatabaseEventHandler(FileSystemEventHandler):
    """
    Forward events that concern one file path to a callback.

    Events are delivered on the observer thread, one at a time.
    """

    def __init__(self, target_path: str, on_change: Callable[[], None]):
        super().__init__()
        self.target_path = os.path.normcase(os.path.abspath(target_path))
        self._on_change = on_change

    def _is_target(self, path: Optional[str]) -> bool:
        if not path:
            return False
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        return os.path.normcase(os.path.abspath(path)) == self.target_path

    def _dispatch_change(self, kind: str, path: str) -> None:
        logger.debug(f"Database {kind}: {path}")
        self._on_change()

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._dispatch_change("modified", event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._dispatch_change("created", event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._dispatch_change("deleted", event.src_path)

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        if event.is_directory:
            return
        if self._is_target(event.dest_path):
            self._dispatch_change("replaced", event.dest_path)
        elif self._is_target(event.src_path):
            self._dispatch_change("moved away", event.src_path)


class DatabaseWatcher:
    """
    Owns the watchdog observer for one database file.

    The observer thread is started by 'start()' and released by 'stop()';
    both are idempotent.
    """

    def __init__(self, database_path: str, on_change: Callable[[], None]):
        self.database_path = os.path.abspath(database_path)
        self._handler = DatabaseEventHandler(self.database_path, on_change)
        self._observer: Optional[Observer] = None

    @property
    def is_active(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        if self._observer is not None:
            return
        directory = os.path.dirname(self.database_path)
        observer = Observer()
        observer.schedule(self._handler, directory, recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info(f"Watching compilation database: {self.database_path}")

    def stop(self, timeout: float = 5.0) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        # Stopping from a change callback runs on the observer thread itself
        if threading.current_thread() is not observer:
            observer.join(timeout)
        logger.debug(f"Stopped watching: {self.database_path}")
