"""Owns the swapenv state snapshot and keeps the status indicator in sync."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from ..core.state import EMPTY_SNAPSHOT, StateSnapshot, parse_info_payload
from ..services.runner import CommandRunner
from .events import EventBus, SnapshotRefreshed

LOGGER = logging.getLogger(__name__)

INFO_ARGS: tuple[str, ...] = ("info", "--format", "json")


class StateCache:
    """Single writer of the :class:`StateSnapshot`.

    The snapshot is only ever replaced as a whole by :meth:`refresh`.
    Overlapping refreshes are not coordinated; whichever finishes last wins.
    """

    def __init__(
        self,
        *,
        runner: CommandRunner,
        root_provider: Callable[[], Path | None],
        status_bar: Any | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._runner = runner
        self._root_provider = root_provider
        self._status_bar = status_bar
        self._bus = event_bus
        self._snapshot: StateSnapshot = EMPTY_SNAPSHOT

    @property
    def snapshot(self) -> StateSnapshot:
        return self._snapshot

    def root(self) -> Path | None:
        return self._root_provider()

    async def refresh(self) -> StateSnapshot:
        """Query ``swapenv info`` and replace the snapshot with the result."""

        root = self._root_provider()
        if root is None:
            LOGGER.debug("No workspace root; clearing swapenv state")
            self._replace(EMPTY_SNAPSHOT)
            return self._snapshot

        output = await self._runner.run(INFO_ARGS, root)
        snapshot = parse_info_payload(output)
        if snapshot is None:
            LOGGER.debug("No swapenv project detected in %s", root)
            snapshot = EMPTY_SNAPSHOT
        self._replace(snapshot)
        return self._snapshot

    def _replace(self, snapshot: StateSnapshot) -> None:
        self._snapshot = snapshot
        self._update_indicator()
        if self._bus is not None:
            self._bus.publish(SnapshotRefreshed(snapshot=snapshot))

    def _update_indicator(self) -> None:
        if self._status_bar is None:
            return
        self._status_bar.set_environment(self._snapshot.status_text)


__all__ = ["StateCache", "INFO_ARGS"]
