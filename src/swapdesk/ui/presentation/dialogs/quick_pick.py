"""Searchable quick-pick dialog that can be awaited from asyncio code."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

try:  # pragma: no cover - optional Qt dependency
    from PySide6.QtCore import Qt
    from PySide6.QtWidgets import (
        QDialog,
        QLineEdit,
        QListWidget,
        QListWidgetItem,
        QVBoxLayout,
    )

    _QT_AVAILABLE = True
except Exception:  # pragma: no cover - headless fallback
    Qt = None  # type: ignore[assignment]
    QDialog = None  # type: ignore[assignment]
    QLineEdit = None  # type: ignore[assignment]
    QListWidget = None  # type: ignore[assignment]
    QListWidgetItem = None  # type: ignore[assignment]
    QVBoxLayout = None  # type: ignore[assignment]
    _QT_AVAILABLE = False

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PickItem:
    """A row in a quick-pick list.

    Separators only label the group that follows them and are never
    returned from :meth:`Picker.pick`. ``payload`` carries whatever the
    caller needs to act on the selection.
    """

    label: str
    description: str = ""
    payload: Any = None
    separator: bool = False

    @classmethod
    def heading(cls, label: str) -> PickItem:
        return cls(label=label, separator=True)

    def matches(self, query: str) -> bool:
        if self.separator:
            return False
        if not query:
            return True
        haystack = f"{self.label} {self.description}".casefold()
        return all(token in haystack for token in query.casefold().split())


class Picker(Protocol):
    """Anything able to let the user choose one item, or cancel with ``None``."""

    async def pick(
        self, items: Sequence[PickItem], *, placeholder: str = ""
    ) -> PickItem | None:  # pragma: no cover - protocol
        ...


class QuickPickDialog:
    """Modal quick-pick built on :class:`QDialog`.

    Without Qt the dialog cannot be shown and every pick resolves to
    ``None`` (a cancellation).
    """

    def __init__(self, *, parent: Any | None = None, enable_qt: bool | None = None) -> None:
        self._parent = parent
        if enable_qt is None:
            self._qt_enabled = bool(_QT_AVAILABLE)
        else:
            self._qt_enabled = bool(enable_qt and _QT_AVAILABLE)
        self._items: list[PickItem] = []

    async def pick(self, items: Sequence[PickItem], *, placeholder: str = "") -> PickItem | None:
        self._items = list(items)
        if not self._qt_enabled or QDialog is None:
            LOGGER.debug("Quick pick unavailable without Qt; treating as cancelled")
            return None

        loop = asyncio.get_running_loop()
        future: asyncio.Future[PickItem | None] = loop.create_future()
        dialog, search_input, list_widget = self._build_dialog(placeholder)

        def _resolve(value: PickItem | None) -> None:
            if not future.done():
                future.set_result(value)

        def _handle_activated(list_item: Any) -> None:
            entry = list_item.data(Qt.ItemDataRole.UserRole) if list_item is not None else None
            if isinstance(entry, PickItem) and not entry.separator:
                _resolve(entry)
                dialog.accept()

        def _handle_query(text: str) -> None:
            self._render(list_widget, text.strip())

        search_input.textChanged.connect(_handle_query)  # type: ignore[attr-defined]
        search_input.returnPressed.connect(  # type: ignore[attr-defined]
            lambda: _handle_activated(list_widget.currentItem())
        )
        list_widget.itemActivated.connect(_handle_activated)  # type: ignore[attr-defined]
        dialog.finished.connect(lambda _result: _resolve(None))  # type: ignore[attr-defined]

        self._render(list_widget, "")
        dialog.open()
        search_input.setFocus()
        try:
            return await future
        finally:
            dialog.deleteLater()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_dialog(self, placeholder: str) -> tuple[Any, Any, Any]:
        dialog = QDialog(self._parent)
        dialog.setWindowTitle(placeholder or "swapenv")
        dialog.setObjectName("sd-quick-pick")
        dialog.setModal(True)
        layout = QVBoxLayout(dialog)
        search_input = QLineEdit()
        search_input.setPlaceholderText(placeholder)
        layout.addWidget(search_input)
        list_widget = QListWidget()
        layout.addWidget(list_widget)
        dialog.resize(420, 360)
        return dialog, search_input, list_widget

    def _render(self, list_widget: Any, query: str) -> None:
        list_widget.clear()
        for entry in visible_items(self._items, query):
            if entry.separator:
                row = QListWidgetItem(entry.label)
                row.setFlags(Qt.ItemFlag.NoItemFlags)
                font = row.font()
                font.setBold(True)
                row.setFont(font)
            else:
                label = f"{entry.label}    {entry.description}" if entry.description else entry.label
                row = QListWidgetItem(label)
            row.setData(Qt.ItemDataRole.UserRole, entry)
            list_widget.addItem(row)
        for index in range(list_widget.count()):
            row = list_widget.item(index)
            if row.flags() & Qt.ItemFlag.ItemIsSelectable:
                list_widget.setCurrentRow(index)
                break


def visible_items(items: Sequence[PickItem], query: str) -> list[PickItem]:
    """Filter ``items`` by ``query`` keeping separators ahead of matching rows."""

    if not query:
        return list(items)
    visible: list[PickItem] = []
    pending_heading: PickItem | None = None
    for entry in items:
        if entry.separator:
            pending_heading = entry
            continue
        if not entry.matches(query):
            continue
        if pending_heading is not None:
            visible.append(pending_heading)
            pending_heading = None
        visible.append(entry)
    return visible


__all__ = ["PickItem", "Picker", "QuickPickDialog", "visible_items"]
