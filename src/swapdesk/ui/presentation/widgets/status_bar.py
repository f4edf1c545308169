"""Status bar with the swapenv environment indicator, usable without Qt."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

try:  # pragma: no cover - Qt imports are optional during tests
    from PySide6.QtWidgets import QApplication, QPushButton, QStatusBar
except Exception:  # pragma: no cover - PySide6 not available
    QApplication = None  # type: ignore[assignment]
    QPushButton = None  # type: ignore[assignment]
    QStatusBar = None  # type: ignore[assignment]

LOGGER = logging.getLogger(__name__)

INDICATOR_GLYPH = "⏻"


class EnvironmentIndicator:
    """Clickable label showing the active environment.

    Hidden until a project is detected; clicking it runs the attached
    callback (the swapenv menu).
    """

    def __init__(self) -> None:
        self._text: str = ""
        self._visible: bool = False
        self._callback: Callable[[], Any] | None = None
        self._button: Any = None

    def install(self, status_bar: Any | None) -> None:
        if status_bar is None or QPushButton is None:
            return
        button = QPushButton(self.display_text)
        button.setObjectName("sd-status-environment")
        button.setFlat(True)
        button.setToolTip("swapenv")
        button.clicked.connect(self._handle_clicked)  # type: ignore[attr-defined]
        button.setVisible(self._visible)
        try:
            status_bar.insertPermanentWidget(0, button)
        except Exception:  # pragma: no cover - Qt defensive guard
            LOGGER.debug("Unable to install environment indicator", exc_info=True)
            return
        self._button = button

    def set_callback(self, callback: Callable[[], Any] | None) -> None:
        self._callback = callback

    def show(self, text: str) -> None:
        self._text = text.strip()
        self._visible = True
        if self._button is not None:
            self._button.setText(self.display_text)
            self._button.setVisible(True)

    def hide(self) -> None:
        self._visible = False
        if self._button is not None:
            self._button.setVisible(False)

    @property
    def text(self) -> str:
        return self._text

    @property
    def display_text(self) -> str:
        return f"{INDICATOR_GLYPH} {self._text}" if self._text else INDICATOR_GLYPH

    @property
    def visible(self) -> bool:
        return self._visible

    def _handle_clicked(self) -> None:
        callback = self._callback
        if callback is None:
            return
        try:
            callback()
        except Exception:  # pragma: no cover - defensive logging
            LOGGER.exception("Environment indicator callback failed")


class StatusBar:
    """Status bar owning the environment indicator and transient messages."""

    def __init__(self, parent: Any | None = None) -> None:
        self._message: str = ""
        self._message_timeout: Optional[int] = None
        self._indicator = EnvironmentIndicator()
        self._qt_bar = self._build_qt_status_bar(parent)
        if self._qt_bar is not None:
            self._indicator.install(self._qt_bar)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_message(self, message: str, *, timeout_ms: Optional[int] = None) -> None:
        """Show a transient status message, honoring optional timeouts."""

        self._message = message
        self._message_timeout = timeout_ms
        if self._qt_bar is not None:
            try:
                self._qt_bar.showMessage(message, timeout_ms or 0)
            except Exception:  # pragma: no cover - Qt defensive guard
                pass

    def clear_message(self) -> None:
        self._message = ""
        self._message_timeout = None
        if self._qt_bar is not None:
            try:
                self._qt_bar.clearMessage()
            except Exception:  # pragma: no cover - Qt defensive guard
                pass

    def set_environment(self, text: str | None) -> None:
        """Show ``text`` in the environment indicator, or hide it for ``None``."""

        if text is None:
            self._indicator.hide()
        else:
            self._indicator.show(text)

    def set_indicator_callback(self, callback: Callable[[], Any] | None) -> None:
        self._indicator.set_callback(callback)

    def widget(self) -> Any | None:
        """Return the underlying :class:`QStatusBar` when available."""

        return self._qt_bar

    # ------------------------------------------------------------------
    # Introspection helpers (handy for tests)
    # ------------------------------------------------------------------
    @property
    def message(self) -> str:
        return self._message

    @property
    def indicator(self) -> EnvironmentIndicator:
        return self._indicator

    @property
    def environment_state(self) -> tuple[str, bool]:
        return (self._indicator.text, self._indicator.visible)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _handle_qt_message_changed(self, text: str) -> None:
        self._message = text
        if not text:
            self._message_timeout = None

    def _build_qt_status_bar(self, parent: Any | None) -> Any | None:
        if QStatusBar is None or QApplication is None:
            return None
        try:
            if QApplication.instance() is None:
                return None
        except Exception:
            return None

        try:
            bar = QStatusBar(parent)
        except Exception:
            return None

        try:
            bar.setObjectName("sd-status-bar")
            bar.messageChanged.connect(self._handle_qt_message_changed)
        except Exception:
            pass
        return bar


__all__ = ["StatusBar", "EnvironmentIndicator"]
