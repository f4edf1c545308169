"""Registry of the swapenv commands and their metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Tuple

from .models.actions import CommandAction
from .presentation.dialogs.quick_pick import PickItem

LOGGER = logging.getLogger(__name__)

SHOW_MENU = "swapenv.showMenu"
SWITCH_ENV = "swapenv.switchEnv"
LOAD = "swapenv.load"
SPIT = "swapenv.spit"
REFRESH = "swapenv.refresh"
SHOW_VERSIONS = "swapenv.showVersions"


@dataclass(frozen=True, slots=True)
class _CommandDefinition:
    command_id: str
    text: str
    shortcut: Optional[str]
    status_tip: Optional[str]


COMMAND_DEFINITIONS: Tuple[_CommandDefinition, ...] = (
    _CommandDefinition(SHOW_MENU, "Show Menu", "Ctrl+Alt+E", "Open the swapenv action menu"),
    _CommandDefinition(SWITCH_ENV, "Switch Environment…", None, "Switch to another environment"),
    _CommandDefinition(LOAD, "Load…", None, "Load the environment (merge or replace)"),
    _CommandDefinition(SPIT, "Spit…", None, "Export all or the current environment"),
    _CommandDefinition(REFRESH, "Refresh", "F5", "Re-read the swapenv project state"),
    _CommandDefinition(SHOW_VERSIONS, "Versions…", None, "Switch the swapenv version"),
)


def build_commands(handlers: Mapping[str, Callable[[], Awaitable[Any]]]) -> Dict[str, CommandAction]:
    """Bind every known command id to its handler; unknown handlers are ignored."""

    unknown = set(handlers) - {definition.command_id for definition in COMMAND_DEFINITIONS}
    if unknown:
        LOGGER.debug("Ignoring handlers for unknown commands: %s", sorted(unknown))
    commands: Dict[str, CommandAction] = {}
    for definition in COMMAND_DEFINITIONS:
        commands[definition.command_id] = CommandAction(
            command_id=definition.command_id,
            text=definition.text,
            shortcut=definition.shortcut,
            status_tip=definition.status_tip,
            callback=handlers.get(definition.command_id),
        )
    return commands


def build_palette_items(
    commands: Mapping[str, CommandAction],
    *,
    exclude: Iterable[str] | None = None,
) -> list[PickItem]:
    """Palette rows for the bound commands, sorted by label."""

    excluded = {name.strip() for name in (exclude or []) if name}
    rows: list[PickItem] = []
    for command_id, command in commands.items():
        if command_id in excluded or command.callback is None:
            continue
        label = f"swapenv: {command.text}"
        rows.append(PickItem(label=label, description=command.shortcut or "", payload=command))
    rows.sort(key=lambda row: row.label.casefold())
    return rows


__all__ = [
    "COMMAND_DEFINITIONS",
    "SHOW_MENU",
    "SWITCH_ENV",
    "LOAD",
    "SPIT",
    "REFRESH",
    "SHOW_VERSIONS",
    "build_commands",
    "build_palette_items",
]
