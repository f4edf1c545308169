"""Passive refresh triggers: workspace saves and window focus."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine

from .events import DocumentSaved, EventBus, WindowFocusChanged

LOGGER = logging.getLogger(__name__)


class RefreshTriggers:
    """Forwards save and focus events to a refresh callback.

    Saves refresh only while ``auto_refresh`` returns true; focus gains
    always refresh. Each event schedules its own task with no debouncing,
    so two rapid events may run overlapping refreshes.
    """

    def __init__(
        self,
        *,
        event_bus: EventBus,
        refresh: Callable[[], Awaitable[Any]],
        auto_refresh: Callable[[], bool],
    ) -> None:
        self._bus = event_bus
        self._refresh = refresh
        self._auto_refresh = auto_refresh
        self._tasks: set[asyncio.Task[Any]] = set()
        self._installed = False

    def install(self) -> None:
        if self._installed:
            return
        self._bus.subscribe(DocumentSaved, self._handle_document_saved)
        self._bus.subscribe(WindowFocusChanged, self._handle_focus_changed)
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        self._bus.unsubscribe(DocumentSaved, self._handle_document_saved)
        self._bus.unsubscribe(WindowFocusChanged, self._handle_focus_changed)
        self._installed = False

    @property
    def pending(self) -> tuple[asyncio.Task[Any], ...]:
        return tuple(self._tasks)

    def _handle_document_saved(self, event: DocumentSaved) -> None:
        if not self._auto_refresh():
            return
        LOGGER.debug("Refreshing after save of %s", event.path)
        self._schedule()

    def _handle_focus_changed(self, event: WindowFocusChanged) -> None:
        if not event.focused:
            return
        self._schedule()

    def _schedule(self) -> None:
        spawn(_await_call(self._refresh), tasks=self._tasks)


async def _await_call(factory: Callable[[], Awaitable[Any]]) -> Any:
    return await factory()


def spawn(coro: Coroutine[Any, Any, Any], *, tasks: set[asyncio.Task[Any]] | None = None) -> asyncio.Task[Any] | None:
    """Schedule ``coro`` on the running loop, logging failures.

    Returns ``None`` (after closing ``coro``) when no loop is running.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        LOGGER.debug("No running event loop; dropping %s", coro)
        coro.close()
        return None
    task = loop.create_task(coro)
    if tasks is not None:
        tasks.add(task)
        task.add_done_callback(tasks.discard)
    task.add_done_callback(_log_task_failure)
    return task


def _log_task_failure(task: asyncio.Task[Any]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        LOGGER.error("Background task failed", exc_info=exc)


__all__ = ["RefreshTriggers", "spawn"]
