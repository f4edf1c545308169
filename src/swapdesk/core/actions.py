"""Action requests the dispatcher turns into ``swapenv`` invocations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["ActionKind", "ActionRequest"]


class ActionKind(str, Enum):
    """Operations a user can pick from the swapenv menus."""

    SWITCH = "switch"
    LOAD = "load"
    LOAD_REPLACE = "load-replace"
    SPIT = "spit"
    SPIT_CURRENT = "spit-current"
    REFRESH = "refresh"
    VERSIONS = "versions"
    SELECT_VERSION = "select-version"


@dataclass(frozen=True, slots=True)
class ActionRequest:
    """A single user-chosen operation.

    ``argument`` carries the environment name for ``SWITCH`` and
    ``SPIT_CURRENT`` and the version identifier for ``SELECT_VERSION``.
    """

    kind: ActionKind
    argument: str | None = None

    @classmethod
    def switch_to(cls, environment: str) -> ActionRequest:
        return cls(ActionKind.SWITCH, environment)

    @classmethod
    def load(cls, *, replace: bool = False) -> ActionRequest:
        return cls(ActionKind.LOAD_REPLACE if replace else ActionKind.LOAD)

    @classmethod
    def spit(cls, environment: str | None = None, *, current: bool = False) -> ActionRequest:
        if current:
            return cls(ActionKind.SPIT_CURRENT, environment)
        return cls(ActionKind.SPIT)

    @classmethod
    def select_version(cls, version_id: str) -> ActionRequest:
        return cls(ActionKind.SELECT_VERSION, version_id)

    @property
    def delegates(self) -> bool:
        """Whether the action hands control to a sub-flow with its own refresh."""

        return self.kind is ActionKind.VERSIONS

    def argv(self) -> tuple[str, ...] | None:
        """Return the ``swapenv`` arguments, or ``None`` when nothing should run."""

        kind = self.kind
        if kind is ActionKind.SWITCH and self.argument:
            return ("to", self.argument)
        if kind is ActionKind.LOAD:
            return ("load",)
        if kind is ActionKind.LOAD_REPLACE:
            return ("load", "--replace")
        if kind is ActionKind.SPIT:
            return ("spit",)
        if kind is ActionKind.SPIT_CURRENT and self.argument:
            return ("spit", "--env", self.argument)
        if kind is ActionKind.SELECT_VERSION and self.argument:
            return ("version", self.argument)
        return None

    def notice(self) -> str | None:
        """Message shown once the invocation has run."""

        kind = self.kind
        if kind is ActionKind.SWITCH and self.argument:
            return f"Switched to {self.argument}"
        if kind is ActionKind.LOAD:
            return "Loaded (merge)"
        if kind is ActionKind.LOAD_REPLACE:
            return "Loaded (replace)"
        if kind is ActionKind.SPIT:
            return "Spit all"
        if kind is ActionKind.SPIT_CURRENT and self.argument:
            return f"Spit {self.argument}"
        if kind is ActionKind.SELECT_VERSION and self.argument:
            return f"Switched to version {self.argument}"
        return None
