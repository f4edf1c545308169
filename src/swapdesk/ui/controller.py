"""Wires the swapenv state cache, dispatcher and triggers together."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from ..services.runner import CommandRunner, SwapenvRunner
from ..services.settings import Settings
from ..services.workspace import Workspace
from . import commands
from .dispatcher import ActionDispatcher
from .events import EventBus
from .models.actions import CommandAction
from .notifications import Notifier
from .presentation.dialogs.quick_pick import Picker, QuickPickDialog
from .presentation.widgets.status_bar import StatusBar
from .state_cache import StateCache
from .triggers import RefreshTriggers, spawn
from .version_browser import VersionBrowser

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IntegrationContext:
    """Collaborators handed to :class:`SwapenvIntegration`.

    Anything left as ``None`` is built from ``settings``; tests pass fakes.
    """

    settings: Settings
    workspace: Workspace
    event_bus: EventBus = field(default_factory=EventBus)
    status_bar: StatusBar | None = None
    runner: CommandRunner | None = None
    picker: Picker | None = None
    notifier: Notifier | None = None
    parent: Any | None = None


class SwapenvIntegration:
    """Owns the single state snapshot and exposes the swapenv commands."""

    def __init__(self, context: IntegrationContext) -> None:
        self._settings = context.settings
        self._workspace = context.workspace
        self._bus = context.event_bus
        self._status_bar = context.status_bar or StatusBar(context.parent)
        self._runner: CommandRunner = context.runner or SwapenvRunner(self._settings.executable)
        self._picker: Picker = context.picker or QuickPickDialog(parent=context.parent)
        self._notifier = context.notifier or Notifier(
            enabled=lambda: bool(self._settings.show_notifications),
            status_bar=self._status_bar,
            event_bus=self._bus,
            parent=context.parent,
        )
        self._cache = StateCache(
            runner=self._runner,
            root_provider=self._workspace.root,
            status_bar=self._status_bar,
            event_bus=self._bus,
        )
        lock = asyncio.Lock()
        self._versions = VersionBrowser(
            cache=self._cache,
            runner=self._runner,
            picker=self._picker,
            notifier=self._notifier,
            lock=lock,
        )
        self._dispatcher = ActionDispatcher(
            cache=self._cache,
            runner=self._runner,
            picker=self._picker,
            notifier=self._notifier,
            version_browser=self._versions,
            lock=lock,
        )
        self._triggers = RefreshTriggers(
            event_bus=self._bus,
            refresh=self._cache.refresh,
            auto_refresh=lambda: bool(self._settings.auto_refresh),
        )
        self._commands: Dict[str, CommandAction] = commands.build_commands(
            {
                commands.SHOW_MENU: self._dispatcher.present_menu,
                commands.SWITCH_ENV: self._dispatcher.switch_environment,
                commands.LOAD: self._dispatcher.load,
                commands.SPIT: self._dispatcher.spit,
                commands.REFRESH: self._dispatcher.refresh,
                commands.SHOW_VERSIONS: self._dispatcher.browse_versions,
            }
        )
        self._tasks: set[asyncio.Task[Any]] = set()
        self._active = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def activate(self) -> None:
        """Register triggers, attach the indicator and run the first refresh."""

        if not self._active:
            self._triggers.install()
            self._status_bar.set_indicator_callback(lambda: self.run_command(commands.SHOW_MENU))
            self._active = True
            LOGGER.info("swapenv integration active (root=%s)", self._workspace.root())
        await self._cache.refresh()

    def deactivate(self) -> None:
        if not self._active:
            return
        self._triggers.uninstall()
        self._status_bar.set_indicator_callback(None)
        for task in list(self._tasks):
            task.cancel()
        self._active = False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    @property
    def commands(self) -> Dict[str, CommandAction]:
        return dict(self._commands)

    async def execute_command(self, command_id: str) -> Any:
        command = self._commands.get(command_id)
        if command is None or command.callback is None:
            raise KeyError(f"Unknown command '{command_id}'")
        LOGGER.debug("Executing %s", command_id)
        return await command.callback()

    def run_command(self, command_id: str) -> asyncio.Task[Any] | None:
        """Fire-and-forget variant used by Qt signal handlers."""

        return spawn(self.execute_command(command_id), tasks=self._tasks)

    def set_workspace_folders(self, folders: list[Path | str]) -> None:
        self._workspace.set_folders(folders)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def state_cache(self) -> StateCache:
        return self._cache

    @property
    def dispatcher(self) -> ActionDispatcher:
        return self._dispatcher

    @property
    def status_bar(self) -> StatusBar:
        return self._status_bar

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def picker(self) -> Picker:
        return self._picker

    @property
    def workspace(self) -> Workspace:
        return self._workspace


__all__ = ["IntegrationContext", "SwapenvIntegration"]
