"""Command descriptors exposed through menus and the command palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable


@dataclass(slots=True)
class CommandAction:
    """A named, independently invocable command."""

    command_id: str
    text: str
    shortcut: str | None = None
    status_tip: str | None = None
    callback: Callable[[], Awaitable[Any]] | None = None


__all__ = ["CommandAction"]
