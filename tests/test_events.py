"""Tests for the event bus."""

from __future__ import annotations

import gc
import weakref

from swapdesk.core.state import EMPTY_SNAPSHOT
from swapdesk.ui.events import DocumentSaved, EventBus, NoticePosted, SnapshotRefreshed, WindowFocusChanged


def test_publish_reaches_handlers_of_exact_type() -> None:
    bus = EventBus()
    saved: list[str] = []
    focus: list[bool] = []
    bus.subscribe(DocumentSaved, lambda event: saved.append(event.path))
    bus.subscribe(WindowFocusChanged, lambda event: focus.append(event.focused))

    bus.publish(DocumentSaved(path="a.txt"))
    bus.publish(WindowFocusChanged(focused=True))

    assert saved == ["a.txt"]
    assert focus == [True]


def test_failing_handler_does_not_block_others() -> None:
    bus = EventBus()
    received: list[str] = []

    def _broken(event: NoticePosted) -> None:
        raise ValueError("boom")

    bus.subscribe(NoticePosted, _broken)
    bus.subscribe(NoticePosted, lambda event: received.append(event.message))

    bus.publish(NoticePosted(message="Loaded (merge)"))

    assert received == ["Loaded (merge)"]


def test_bound_method_handlers_are_weak() -> None:
    class _Listener:
        def __init__(self) -> None:
            self.events: list[SnapshotRefreshed] = []

        def handle(self, event: SnapshotRefreshed) -> None:
            self.events.append(event)

    bus = EventBus()
    listener = _Listener()
    bus.subscribe(SnapshotRefreshed, listener.handle)
    bus.publish(SnapshotRefreshed(snapshot=EMPTY_SNAPSHOT))
    assert len(listener.events) == 1

    listener_ref = weakref.ref(listener)
    del listener
    gc.collect()

    assert listener_ref() is None
    bus.publish(SnapshotRefreshed(snapshot=EMPTY_SNAPSHOT))


def test_unsubscribe_removes_only_that_handler() -> None:
    bus = EventBus()
    received: list[str] = []

    def _first(event: DocumentSaved) -> None:
        received.append("first")

    def _second(event: DocumentSaved) -> None:
        received.append("second")

    bus.subscribe(DocumentSaved, _first)
    bus.subscribe(DocumentSaved, _second)
    bus.unsubscribe(DocumentSaved, _first)
    bus.unsubscribe(WindowFocusChanged, _second)
    bus.publish(DocumentSaved(path="a.txt"))

    assert received == ["second"]


def test_handler_subscribed_during_publish_is_kept() -> None:
    bus = EventBus()
    late: list[bool] = []

    def _subscribe_late(event: WindowFocusChanged) -> None:
        bus.subscribe(WindowFocusChanged, lambda inner: late.append(inner.focused))

    bus.subscribe(WindowFocusChanged, _subscribe_late)
    bus.publish(WindowFocusChanged(focused=True))
    bus.publish(WindowFocusChanged(focused=False))

    assert late == [False]
