"""Menu construction and execution of swapenv actions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ..core.actions import ActionKind, ActionRequest
from ..core.state import StateSnapshot
from ..services.runner import CommandRunner
from .notifications import Notifier
from .presentation.dialogs.quick_pick import PickItem, Picker
from .state_cache import StateCache
from .version_browser import VersionBrowser

LOGGER = logging.getLogger(__name__)

CURRENT_MARK = "✓"


def build_menu_items(snapshot: StateSnapshot) -> list[PickItem]:
    """Return the grouped entries of the main swapenv menu."""

    items: list[PickItem] = []
    if snapshot.known_environments:
        items.append(PickItem.heading("to..."))
        for environment in snapshot.known_environments:
            current = snapshot.is_active(environment)
            items.append(
                PickItem(
                    label=f"{CURRENT_MARK if current else '  '} {environment}",
                    description="(current)" if current else "",
                    payload=ActionRequest.switch_to(environment),
                )
            )

    items.append(PickItem.heading("Load"))
    items.extend(_load_items())
    items.append(PickItem.heading("Spit"))
    items.append(PickItem(label="Spit (all)", payload=ActionRequest.spit()))
    items.append(PickItem(label="Spit (current)", payload=ActionRequest.spit(current=True)))
    items.append(PickItem.heading("Utility"))
    items.append(PickItem(label="Refresh", payload=ActionRequest(ActionKind.REFRESH)))
    items.append(PickItem(label="Versions...", payload=ActionRequest(ActionKind.VERSIONS)))
    return items


def build_environment_items(snapshot: StateSnapshot) -> list[PickItem]:
    return [
        PickItem(
            label=environment,
            description="(current)" if snapshot.is_active(environment) else "",
            payload=ActionRequest.switch_to(environment),
        )
        for environment in snapshot.known_environments
    ]


def build_spit_items(snapshot: StateSnapshot) -> list[PickItem]:
    current = snapshot.active_environment or "none"
    return [
        PickItem(label="Spit (all)", payload=ActionRequest.spit()),
        PickItem(label=f"Spit (current: {current})", payload=ActionRequest.spit(current=True)),
    ]


def _load_items() -> list[PickItem]:
    return [
        PickItem(label="Load (merge)", payload=ActionRequest.load()),
        PickItem(label="Load (replace)", payload=ActionRequest.load(replace=True)),
    ]


class ActionDispatcher:
    """Presents swapenv actions and runs the chosen one.

    Every executed action is followed by a refresh of the :class:`StateCache`
    and, when something ran, a notification. Execution is serialized: a
    second action waits until the previous action's refresh has finished.
    """

    def __init__(
        self,
        *,
        cache: StateCache,
        runner: CommandRunner,
        picker: Picker,
        notifier: Notifier,
        version_browser: VersionBrowser | None = None,
        lock: asyncio.Lock | None = None,
    ) -> None:
        self._cache = cache
        self._runner = runner
        self._picker = picker
        self._notifier = notifier
        self._lock = lock or asyncio.Lock()
        self._versions = version_browser or VersionBrowser(
            cache=cache,
            runner=runner,
            picker=picker,
            notifier=notifier,
            lock=self._lock,
        )

    @property
    def version_browser(self) -> VersionBrowser:
        return self._versions

    # ------------------------------------------------------------------
    # Command entry points
    # ------------------------------------------------------------------
    async def present_menu(self) -> ActionRequest | None:
        """Show the grouped menu and run the selected action."""

        items = build_menu_items(self._cache.snapshot)
        return await self._pick_and_execute(items, placeholder="swapenv")

    async def switch_environment(self) -> ActionRequest | None:
        """Environment-only picker; refreshes first when nothing is known yet."""

        if self._cache.root() is None:
            return None
        if not self._cache.snapshot.known_environments:
            await self._cache.refresh()
        items = build_environment_items(self._cache.snapshot)
        return await self._pick_and_execute(items, placeholder="Switch to environment...")

    async def load(self) -> ActionRequest | None:
        return await self._pick_and_execute(_load_items(), placeholder="Load environment...")

    async def spit(self) -> ActionRequest | None:
        items = build_spit_items(self._cache.snapshot)
        return await self._pick_and_execute(items, placeholder="Spit environment...")

    async def refresh(self) -> None:
        await self._cache.refresh()

    async def browse_versions(self) -> str | None:
        return await self._versions.browse()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    async def execute(self, request: ActionRequest) -> None:
        """Run ``request`` against the current workspace root."""

        root = self._cache.root()
        if root is None:
            LOGGER.debug("No workspace root; ignoring %s", request.kind.value)
            return
        if request.delegates:
            await self._versions.browse()
            return

        async with self._lock:
            if request.kind is ActionKind.SPIT_CURRENT and request.argument is None:
                request = replace(request, argument=self._cache.snapshot.active_environment)
            argv = request.argv()
            if argv is not None:
                LOGGER.info("Running swapenv %s", " ".join(argv))
                await self._runner.run(argv, root)
            elif request.kind is ActionKind.SPIT_CURRENT:
                LOGGER.debug("No active environment; skipping spit --env")
            await self._cache.refresh()
            notice = request.notice() if argv is not None else None
            if notice:
                self._notifier.info(notice)

    async def _pick_and_execute(self, items: list[PickItem], *, placeholder: str) -> ActionRequest | None:
        picked = await self._picker.pick(items, placeholder=placeholder)
        if picked is None or picked.separator or not isinstance(picked.payload, ActionRequest):
            LOGGER.debug("Selection cancelled (%s)", placeholder)
            return None
        request = picked.payload
        await self.execute(request)
        return request


__all__ = [
    "ActionDispatcher",
    "build_menu_items",
    "build_environment_items",
    "build_spit_items",
]
