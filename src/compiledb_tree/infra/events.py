from __future__ import annotations

"""
Change Notification Channel.

Minimal observer registry used by the explorer to tell its host that the
tree was replaced, or that a refresh failed. Subscribers are plain callables.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

EVENT_CHANGED = "changed"
EVENT_ERROR = "error"

# Payload of 'changed' notifications: every node may have changed
ALL_NODES = None


class EventEmitter:
    """Named-event observer registry."""

    def __init__(self) -> None:
        self._events: Dict[str, List[Callable]] = {}
        self._lock = threading.Lock()

    def on(self, event: str, callback: Callable) -> Callable[[], None]:
        """
        Register 'callback' for 'event'.

        Returns:
            Callable[[], None]: Function that removes this registration.
        """
        with self._lock:
            self._events.setdefault(event, []).append(callback)
        active = True

        def _unsubscribe() -> None:
            nonlocal active
            if active:
                active = False
                self.off(event, callback)

        return _unsubscribe

    def off(self, event: str, callback: Optional[Callable] = None) -> None:
        """
        Remove one registration of 'callback', or every callback of 'event'
        when none is given.
        """
        with self._lock:
            if event not in self._events:
                return
            if callback is None:
                del self._events[event]
            else:
                callbacks = self._events[event]
                if callback in callbacks:
                    callbacks.remove(callback)

    def emit(self, event: str, *args, **kwargs) -> None:
        """
        Invoke every callback registered for 'event'.

        A failing subscriber is logged and does not prevent the remaining
        subscribers from being notified.
        """
        with self._lock:
            callbacks = list(self._events.get(event, ()))
        for callback in callbacks:
            try:
                callback(*args, **kwargs)
            except Exception:
                logger.exception(f"Subscriber for '{event}' raised.")

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._events.get(event, ()))

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
