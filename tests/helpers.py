"""Shared test doubles for the swapenv integration tests.

Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Sequence

from swapdesk.ui.presentation.dialogs.quick_pick import PickItem

INFO = ("info", "--format", "json")


class FakeRunner:
    """Records invocations and replays canned ``swapenv`` output.

    ``responses`` maps an argv tuple to the output (``None`` for failure) or a
    callable producing it, so the external state can change between calls.
    """

    def __init__(self, responses: Mapping[tuple[str, ...], object] | None = None) -> None:
        self.responses: dict[tuple[str, ...], object] = dict(responses or {})
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    async def run(self, args: Sequence[str], cwd: Path | str) -> str | None:
        argv = tuple(args)
        self.calls.append((argv, Path(cwd)))
        response = self.responses.get(argv)
        if callable(response):
            response = response()
        return response  # type: ignore[return-value]

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [argv for argv, _cwd in self.calls]

    def mutating_calls(self) -> list[tuple[str, ...]]:
        return [argv for argv in self.argvs if argv != INFO]


class ScriptedPicker:
    """Picks items by label; ``None`` in the script cancels the picker."""

    def __init__(self, *choices: str | Callable[[Sequence[PickItem]], PickItem | None] | None) -> None:
        self._choices = list(choices)
        self.seen: list[tuple[str, list[PickItem]]] = []

    async def pick(self, items: Sequence[PickItem], *, placeholder: str = "") -> PickItem | None:
        self.seen.append((placeholder, list(items)))
        if not self._choices:
            return None
        choice = self._choices.pop(0)
        if choice is None:
            return None
        if callable(choice):
            return choice(items)
        for item in items:
            if not item.separator and item.label.strip() == choice.strip():
                return item
        raise AssertionError(f"No item labelled {choice!r} in {[item.label for item in items]}")

    @property
    def last_items(self) -> list[PickItem]:
        return self.seen[-1][1] if self.seen else []


class RecordingStatusBar:
    """Status bar double capturing indicator updates."""

    def __init__(self) -> None:
        self.environment: str | None = None
        self.visible = False
        self.messages: list[str] = []
        self.callback = None

    def set_environment(self, text: str | None) -> None:
        self.environment = text
        self.visible = text is not None

    def set_message(self, message: str, *, timeout_ms: int | None = None) -> None:
        del timeout_ms
        self.messages.append(message)

    def set_indicator_callback(self, callback) -> None:  # type: ignore[no-untyped-def]
        self.callback = callback
