"""Event bus infrastructure for decoupled UI component communication.

The host window, the save watcher and the refresh triggers never reference
each other directly: they publish and subscribe to the events below.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable
from weakref import WeakMethod

from ..core.state import StateSnapshot

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


@dataclass(slots=True)
class Event:
    """Base class for all events published on the :class:`EventBus`."""

    pass


@dataclass(slots=True)
class DocumentSaved(Event):
    """Emitted when a file inside the workspace is written to disk.

    Attributes:
        path: The filesystem path that was saved.
    """

    path: str


@dataclass(slots=True)
class WindowFocusChanged(Event):
    """Emitted when the host window gains or loses focus.

    Attributes:
        focused: Whether the window is now the active window.
    """

    focused: bool


@dataclass(slots=True)
class SnapshotRefreshed(Event):
    """Emitted after every refresh replaced the state snapshot.

    Attributes:
        snapshot: The snapshot now held by the state cache.
    """

    snapshot: StateSnapshot


@dataclass(slots=True)
class NoticePosted(Event):
    """Emitted when a user-facing message was shown.

    Attributes:
        message: The text shown to the user.
        level: ``"info"`` or ``"warning"``.
    """

    message: str
    level: str = "info"


class EventBus:
    """Synchronous publish/subscribe hub keyed by the exact event class.

    Bound methods are held weakly, so a subscriber that goes away simply
    stops receiving events. Not thread-safe; everything runs on the loop
    thread.
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: dict[type[Event], list[_Subscription]] = {}

    def subscribe(self, event_type: type[Event], handler: Handler) -> None:
        self._subscriptions.setdefault(event_type, []).append(_Subscription(handler))
        logger.debug("%s subscribed to %s", _describe(handler), event_type.__name__)

    def unsubscribe(self, event_type: type[Event], handler: Handler) -> None:
        """Drop every registration of ``handler``; unknown handlers are ignored."""

        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            subscriptions[:] = [item for item in subscriptions if not item.refers_to(handler)]

    def publish(self, event: Event) -> None:
        """Call each live handler in registration order.

        A handler raising is logged; the remaining handlers still run.
        """

        subscriptions = self._subscriptions.get(type(event))
        if not subscriptions:
            return
        for subscription in list(subscriptions):
            handler = subscription.target()
            if handler is None:
                continue
            try:
                handler(event)
            except Exception:
                logger.exception("%s failed on %s", _describe(handler), type(event).__name__)
        subscriptions[:] = [item for item in subscriptions if item.target() is not None]


class _Subscription:
    __slots__ = ("_target",)

    def __init__(self, handler: Handler) -> None:
        if inspect.ismethod(handler):
            self._target: Callable[[], Handler | None] = WeakMethod(handler)
        else:
            self._target = lambda: handler

    def target(self) -> Handler | None:
        return self._target()

    def refers_to(self, handler: Handler) -> bool:
        current = self._target()
        return current is None or current == handler


def _describe(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


__all__ = [
    "Event",
    "EventBus",
    "Handler",
    "DocumentSaved",
    "WindowFocusChanged",
    "SnapshotRefreshed",
    "NoticePosted",
]
