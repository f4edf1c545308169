"""Publishes :class:`DocumentSaved` events for files written in the workspace."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable

from watchfiles import Change, awatch

from ..events import DocumentSaved, EventBus

LOGGER = logging.getLogger(__name__)

_IGNORED_PARTS = frozenset({".git", "__pycache__", "node_modules", ".venv"})


def saved_paths(changes: Iterable[tuple[Change, str]]) -> list[str]:
    """Return the added/modified paths of a watchfiles batch, deduplicated."""

    paths: list[str] = []
    for change, changed_path in changes:
        if change == Change.deleted:
            continue
        if _IGNORED_PARTS.intersection(Path(changed_path).parts):
            continue
        if changed_path not in paths:
            paths.append(changed_path)
    return sorted(paths)


class SaveWatcher:
    """Watches the workspace root and turns write batches into save events."""

    def __init__(self, event_bus: EventBus, *, debounce_ms: int = 300) -> None:
        self._bus = event_bus
        self._debounce_ms = debounce_ms
        self._task: asyncio.Task[Any] | None = None
        self._stop_event: asyncio.Event | None = None
        self._root: Path | None = None

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, root: Path | None) -> None:
        """Start watching ``root``; restarts when the root changed."""

        if root is not None and root == self._root and self.running:
            return
        self.stop()
        self._root = root
        if root is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            LOGGER.warning("Save watcher not started; no running asyncio event loop.")
            return
        self._stop_event = asyncio.Event()
        self._task = loop.create_task(self._watch(root, self._stop_event))

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._stop_event = None

    def publish_changes(self, changes: Iterable[tuple[Change, str]]) -> int:
        count = 0
        for path in saved_paths(changes):
            self._bus.publish(DocumentSaved(path=path))
            count += 1
        return count

    async def _watch(self, root: Path, stop_event: asyncio.Event) -> None:
        LOGGER.debug("Watching %s for saves", root)
        try:
            async for changes in awatch(str(root), stop_event=stop_event, debounce=self._debounce_ms):
                self.publish_changes(changes)
        except asyncio.CancelledError:
            raise
        except OSError as exc:
            LOGGER.warning("Save watcher for %s stopped: %s", root, exc)


__all__ = ["SaveWatcher", "saved_paths"]
