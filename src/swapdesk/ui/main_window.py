"""Host window for the swapenv integration.

The window owns the status bar, exposes every swapenv command through a
menu and a command palette, forwards application focus changes to the
event bus, and keeps the save watcher pointed at the workspace root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from . import commands
from .controller import IntegrationContext, SwapenvIntegration
from .events import WindowFocusChanged
from .infrastructure.save_watcher import SaveWatcher
from .presentation.dialogs.quick_pick import QuickPickDialog
from .presentation.widgets.status_bar import StatusBar
from .triggers import spawn

LOGGER = logging.getLogger(__name__)

WINDOW_APP_NAME = "SwapDesk"
PALETTE_SHORTCUT = "Ctrl+Shift+P"

try:  # pragma: no cover - PySide6 optional in CI
    from PySide6.QtCore import Qt
    from PySide6.QtGui import QAction, QKeySequence
    from PySide6.QtWidgets import QApplication, QFileDialog, QLabel, QMainWindow

    _QT_AVAILABLE = True
except Exception:  # pragma: no cover - runtime stubs keep tests headless
    _QT_AVAILABLE = False
    Qt = None  # type: ignore[assignment,misc]
    QAction = None  # type: ignore[assignment,misc]
    QKeySequence = None  # type: ignore[assignment,misc]
    QApplication = None  # type: ignore[assignment,misc]
    QFileDialog = None  # type: ignore[assignment,misc]
    QLabel = None  # type: ignore[assignment,misc]

    class QMainWindow:  # type: ignore[no-redef]
        """Stub for headless testing."""

        def __init__(self, *args: object, **kwargs: object) -> None:
            pass

        def setWindowTitle(self, title: str) -> None:
            pass

        def setCentralWidget(self, widget: Any) -> None:
            pass

        def setStatusBar(self, widget: Any) -> None:
            pass

        def menuBar(self) -> Any:
            return None

        def show(self) -> None:
            pass


class MainWindow(QMainWindow):
    """Thin shell around :class:`SwapenvIntegration`."""

    def __init__(self, context: IntegrationContext, *, qt_enabled: bool | None = None) -> None:
        super().__init__()
        self._qt_enabled = _QT_AVAILABLE if qt_enabled is None else bool(qt_enabled and _QT_AVAILABLE)
        parent = self if self._qt_enabled else None
        if context.status_bar is None:
            context.status_bar = StatusBar(parent)
        if context.picker is None:
            context.picker = QuickPickDialog(parent=parent, enable_qt=self._qt_enabled)
        context.parent = parent
        self._integration = SwapenvIntegration(context)
        self._save_watcher = SaveWatcher(self._integration.event_bus)
        self._qt_actions: dict[str, Any] = {}
        self._root_label: Any = None
        if self._qt_enabled:
            self._build_ui()
        self._update_title()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def start(self) -> None:
        """Activate the integration and begin watching the workspace."""

        await self._integration.activate()
        self._save_watcher.start(self._integration.workspace.root())

    def shutdown(self) -> None:
        self._save_watcher.stop()
        self._integration.deactivate()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    @property
    def integration(self) -> SwapenvIntegration:
        return self._integration

    @property
    def save_watcher(self) -> SaveWatcher:
        return self._save_watcher

    def open_folder(self, folder: Path | str) -> None:
        """Make ``folder`` the workspace root and refresh."""

        self._integration.set_workspace_folders([folder])
        self._save_watcher.start(self._integration.workspace.root())
        self._update_title()
        self._integration.run_command(commands.REFRESH)

    def handle_focus_changed(self, focused: bool) -> None:
        self._integration.event_bus.publish(WindowFocusChanged(focused=focused))

    async def show_command_palette(self) -> None:
        rows = commands.build_palette_items(self._integration.commands)
        picked = await self._integration.picker.pick(rows, placeholder="Run swapenv command...")
        if picked is None:
            return
        await self._integration.execute_command(picked.payload.command_id)

    def window_title(self) -> str:
        root = self._integration.workspace.root()
        return f"{root.name} — {WINDOW_APP_NAME}" if root is not None else WINDOW_APP_NAME

    # ------------------------------------------------------------------
    # Qt wiring
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self._root_label = QLabel()
        self._root_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(self._root_label)
        bar = self._integration.status_bar.widget()
        if bar is not None:
            self.setStatusBar(bar)

        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")
        open_action = QAction("Open Folder…", self)
        open_action.setShortcut(QKeySequence("Ctrl+K, Ctrl+O"))
        open_action.triggered.connect(self._prompt_open_folder)  # type: ignore[attr-defined]
        file_menu.addAction(open_action)
        self._qt_actions["open_folder"] = open_action

        swapenv_menu = menu_bar.addMenu("&swapenv")
        for command_id, command in self._integration.commands.items():
            action = QAction(command.text, self)
            if command.shortcut:
                action.setShortcut(QKeySequence(command.shortcut))
            if command.status_tip:
                action.setStatusTip(command.status_tip)
            action.triggered.connect(  # type: ignore[attr-defined]
                lambda _checked=False, cid=command_id: self._integration.run_command(cid)
            )
            swapenv_menu.addAction(action)
            self._qt_actions[command_id] = action

        palette_action = QAction("Command Palette…", self)
        palette_action.setShortcut(QKeySequence(PALETTE_SHORTCUT))
        palette_action.triggered.connect(  # type: ignore[attr-defined]
            lambda _checked=False: spawn(self.show_command_palette())
        )
        swapenv_menu.addSeparator()
        swapenv_menu.addAction(palette_action)
        self._qt_actions["command_palette"] = palette_action

        app = QApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._handle_application_state)  # type: ignore[attr-defined]

    def _handle_application_state(self, state: Any) -> None:
        self.handle_focus_changed(state == Qt.ApplicationState.ApplicationActive)

    def _prompt_open_folder(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, "Open Folder")
        if folder:
            self.open_folder(folder)

    def _update_title(self) -> None:
        title = self.window_title()
        self.setWindowTitle(title)
        if self._root_label is not None:
            root = self._integration.workspace.root()
            self._root_label.setText(str(root) if root is not None else "Open a folder to use swapenv")

    def closeEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        self.shutdown()
        super().closeEvent(event)


__all__ = ["MainWindow", "WINDOW_APP_NAME"]
