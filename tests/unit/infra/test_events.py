from __future__ import annotations

"""
Unit tests for the Change Notification Channel.
"""

from typing import List

from compiledb_tree.infra.events import EventEmitter


def test_emit_reaches_all_subscribers() -> None:
    emitter = EventEmitter()
    a: List[int] = []
    b: List[int] = []
    emitter.on("changed", a.append)
    emitter.on("changed", b.append)

    emitter.emit("changed", 1)

    assert a == [1]
    assert b == [1]


def test_unsubscribe_function() -> None:
    emitter = EventEmitter()
    seen: List[int] = []
    unsubscribe = emitter.on("changed", seen.append)

    unsubscribe()
    emitter.emit("changed", 1)

    assert seen == []
    assert emitter.listener_count("changed") == 0


def test_unsubscribe_removes_only_its_own_registration() -> None:
    emitter = EventEmitter()
    seen: List[int] = []
    first = emitter.on("changed", seen.append)
    emitter.on("changed", seen.append)

    first()
    first()
    emitter.emit("changed", 1)

    assert seen == [1]
    assert emitter.listener_count("changed") == 1


def test_off_without_callback_removes_event() -> None:
    emitter = EventEmitter()
    emitter.on("error", lambda e: None)
    emitter.on("error", lambda e: None)

    emitter.off("error")
    emitter.off("missing")

    assert emitter.listener_count("error") == 0


def test_failing_subscriber_does_not_block_others() -> None:
    emitter = EventEmitter()
    seen: List[str] = []

    def _fail(_value: str) -> None:
        raise ValueError("bad subscriber")

    emitter.on("changed", _fail)
    emitter.on("changed", seen.append)

    emitter.emit("changed", "x")

    assert seen == ["x"]


def test_subscriber_can_unsubscribe_during_emit() -> None:
    emitter = EventEmitter()
    seen: List[int] = []

    def _once(value: int) -> None:
        seen.append(value)
        unsubscribe()

    unsubscribe = emitter.on("changed", _once)
    emitter.emit("changed", 1)
    emitter.emit("changed", 2)

    assert seen == [1]


def test_clear() -> None:
    emitter = EventEmitter()
    emitter.on("changed", lambda v: None)
    emitter.clear()
    assert emitter.listener_count("changed") == 0
