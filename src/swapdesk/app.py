"""Command-line entry point for the SwapDesk window."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence, TextIO

from .services.settings import Settings, SettingsStore, environment_overrides
from .services.workspace import Workspace
from .ui.controller import IntegrationContext
from .ui.main_window import WINDOW_APP_NAME, MainWindow
from .ui.triggers import spawn
from .utils import logging as logging_utils

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class QtRuntime:
    """The QApplication and the qasync loop driving it."""

    app: Any
    loop: asyncio.AbstractEventLoop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swapdesk",
        description="Show swapenv project state and actions in a desktop status bar.",
    )
    parser.add_argument(
        "workspace",
        nargs="*",
        metavar="FOLDER",
        help="Workspace folder(s); the first existing one is the swapenv project root.",
    )
    parser.add_argument("--settings-path", metavar="PATH", help="Settings file (default ~/.swapdesk/settings.json).")
    parser.add_argument("--executable", metavar="PATH", help="swapenv executable to run.")
    parser.add_argument(
        "--notifications",
        dest="show_notifications",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show a message after each completed action.",
    )
    parser.add_argument(
        "--auto-refresh",
        dest="auto_refresh",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Refresh when a file in the workspace is saved.",
    )
    parser.add_argument("--debug", dest="debug_logging", action="store_true", default=None, help="Verbose logging.")
    parser.add_argument("--dump-settings", action="store_true", help="Print the effective settings and exit.")
    return parser


def command_line_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Settings given on the command line; options left out are omitted."""

    overrides: Dict[str, Any] = {}
    for name in ("show_notifications", "auto_refresh", "debug_logging"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.executable is not None:
        overrides["executable"] = args.executable.strip()
    return overrides


def build_workspace(settings: Settings, folders: Sequence[str] | None = None) -> Workspace:
    """Positional folders win over persisted ones; fall back to the cwd."""

    chosen: list[str] = list(folders or []) or list(settings.workspace_folders)
    if not chosen:
        chosen = [os.getcwd()]
    return Workspace(chosen)


def create_qapp() -> QtRuntime:
    from PySide6.QtWidgets import QApplication
    from qasync import QEventLoop

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(WINDOW_APP_NAME)
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)
    app.aboutToQuit.connect(loop.stop)  # type: ignore[attr-defined]
    return QtRuntime(app=app, loop=loop)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point invoked by the ``swapdesk`` console script."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.executable is not None and not args.executable.strip():
        parser.error("--executable must not be empty")

    overrides = command_line_overrides(args)
    store = SettingsStore(args.settings_path or os.environ.get("SWAPDESK_SETTINGS_PATH"))
    settings = store.load(overrides=overrides)

    if args.dump_settings:
        dump_settings(settings, store, overrides=overrides)
        return

    logging_utils.configure(debug=settings.debug_logging)
    workspace = build_workspace(settings, args.workspace)
    runtime = create_qapp()
    window = MainWindow(IntegrationContext(settings=settings, workspace=workspace))
    window.show()

    loop = runtime.loop
    start_tasks = schedule_start(window, loop)
    try:
        loop.run_forever()
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown path
        _LOGGER.info("Interrupted; shutting down")
    finally:
        window.shutdown()
        for task in start_tasks:
            task.cancel()
        cancel_pending(loop)
        loop.close()


def schedule_start(window: Any, loop: asyncio.AbstractEventLoop) -> set[asyncio.Task[Any]]:
    """Run ``window.start()`` once ``loop`` is running; failures are logged."""

    tasks: set[asyncio.Task[Any]] = set()
    loop.call_soon(lambda: spawn(window.start(), tasks=tasks))
    return tasks


def cancel_pending(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel whatever is still scheduled on ``loop`` and wait for it."""

    if loop.is_closed():
        return
    pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        _LOGGER.debug("Cancelling %d task(s) at shutdown", len(pending))
        loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
    loop.run_until_complete(loop.shutdown_asyncgens())


def dump_settings(
    settings: Settings,
    store: SettingsStore,
    *,
    overrides: Dict[str, Any],
    stream: TextIO | None = None,
) -> None:
    report = {
        "settings": asdict(settings),
        "sources": {
            "file": str(store.path),
            "command_line": sorted(overrides),
            "environment": sorted(environment_overrides()),
            "log_file": str(logging_utils.log_file_path()),
        },
    }
    destination = stream or sys.stdout
    json.dump(report, destination, indent=2)
    destination.write("\n")
