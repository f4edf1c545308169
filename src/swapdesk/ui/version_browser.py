"""Picker flow over ``swapenv version ls``."""

from __future__ import annotations

import asyncio
import logging

from ..core.actions import ActionRequest
from ..core.versions import parse_version_listing
from ..services.runner import CommandRunner
from .notifications import Notifier
from .presentation.dialogs.quick_pick import PickItem, Picker
from .state_cache import StateCache

LOGGER = logging.getLogger(__name__)

VERSION_LIST_ARGS: tuple[str, ...] = ("version", "ls")
NO_VERSIONS_MESSAGE = "No versions found"


class VersionBrowser:
    """Lists tool versions, lets the user pick one and switches to it.

    An empty listing is the one failure surfaced to the user: it produces a
    warning regardless of the notification setting.
    """

    def __init__(
        self,
        *,
        cache: StateCache,
        runner: CommandRunner,
        picker: Picker,
        notifier: Notifier,
        lock: asyncio.Lock | None = None,
    ) -> None:
        self._cache = cache
        self._runner = runner
        self._picker = picker
        self._notifier = notifier
        self._lock = lock or asyncio.Lock()

    async def browse(self) -> str | None:
        """Run the flow; return the version switched to, or ``None``."""

        root = self._cache.root()
        if root is None:
            return None

        output = await self._runner.run(VERSION_LIST_ARGS, root)
        entries = parse_version_listing(output)
        if not entries:
            self._notifier.warning(NO_VERSIONS_MESSAGE)
            return None

        items = [PickItem(label=entry.label, payload=entry) for entry in entries]
        picked = await self._picker.pick(items, placeholder="Switch to version...")
        if picked is None:
            LOGGER.debug("Version selection cancelled")
            return None

        request = ActionRequest.select_version(picked.payload.version)
        async with self._lock:
            await self._runner.run(request.argv() or (), root)
            notice = request.notice()
            if notice:
                self._notifier.info(notice)
            await self._cache.refresh()
        return request.argument


__all__ = ["VersionBrowser", "VERSION_LIST_ARGS", "NO_VERSIONS_MESSAGE"]
