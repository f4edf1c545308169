"""User-facing notifications for completed swapenv actions."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable

from .events import EventBus, NoticePosted

try:  # pragma: no cover - optional Qt dependency
    from PySide6.QtWidgets import QMessageBox
except Exception:  # pragma: no cover - headless fallback
    QMessageBox = None  # type: ignore[assignment]

LOGGER = logging.getLogger(__name__)

_INFO_TIMEOUT_MS = 5_000
_HISTORY_LIMIT = 50


class Notifier:
    """Routes info and warning messages to the status bar and message boxes.

    Information messages honour the ``show_notifications`` setting (read
    through ``enabled`` at call time); warnings are always shown.
    """

    def __init__(
        self,
        *,
        enabled: Callable[[], bool],
        status_bar: Any | None = None,
        event_bus: EventBus | None = None,
        parent: Any | None = None,
    ) -> None:
        self._enabled = enabled
        self._status_bar = status_bar
        self._bus = event_bus
        self._parent = parent
        self._history: deque[tuple[str, str]] = deque(maxlen=_HISTORY_LIMIT)

    @property
    def history(self) -> list[tuple[str, str]]:
        """The most recent messages shown, oldest first."""

        return list(self._history)

    def info(self, message: str) -> bool:
        """Show ``message`` unless notifications are disabled; return whether shown."""

        if not self._enabled():
            LOGGER.debug("Notification suppressed: %s", message)
            return False
        self._post("info", message)
        if self._status_bar is not None:
            self._status_bar.set_message(message, timeout_ms=_INFO_TIMEOUT_MS)
        return True

    def warning(self, message: str) -> None:
        self._post("warning", message)
        LOGGER.warning(message)
        if self._status_bar is not None:
            self._status_bar.set_message(message, timeout_ms=_INFO_TIMEOUT_MS)
        if QMessageBox is not None and self._parent is not None:
            box = QMessageBox(QMessageBox.Icon.Warning, "swapenv", message, parent=self._parent)
            box.open()

    def _post(self, level: str, message: str) -> None:
        self._history.append((level, message))
        if self._bus is not None:
            self._bus.publish(NoticePosted(message=message, level=level))


__all__ = ["Notifier"]
