"""Logging setup for SwapDesk.

Everything is written to a rotating file under ``~/.swapdesk/logs``; the
console only shows warnings unless debug logging is on. Output of failed
``swapenv`` invocations goes to the :data:`SWAPENV_LOGGER` logger, which is
silenced below WARNING unless debug logging is on.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

__all__ = ["SWAPENV_LOGGER", "configure", "log_file_path", "route_qt_messages"]

SWAPENV_LOGGER = "swapdesk.swapenv"
LOG_FILE_NAME = "swapdesk.log"
_QUIET_LOGGERS = ("asyncio", "qasync", "watchfiles")
_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def log_file_path(log_dir: Path | str | None = None) -> Path:
    """Where :func:`configure` writes, honouring ``SWAPDESK_LOG_DIR``."""

    base = log_dir or os.environ.get("SWAPDESK_LOG_DIR") or Path.home() / ".swapdesk" / "logs"
    return Path(base).expanduser() / LOG_FILE_NAME


def configure(*, debug: bool = False, log_dir: Path | str | None = None, console: bool = True) -> Path:
    """Install the file (and console) handlers on the root logger."""

    path = log_file_path(log_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")

    file_handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [file_handler]
    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, handlers=handlers, force=True)
    logging.getLogger(SWAPENV_LOGGER).setLevel(logging.DEBUG if debug else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.captureWarnings(True)
    route_qt_messages()
    logging.getLogger(__name__).debug("Logging to %s (debug=%s)", path, debug)
    return path


def route_qt_messages() -> None:
    """Send Qt's own diagnostics to the ``swapdesk.qt`` logger."""

    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except Exception:  # pragma: no cover - PySide6 optional during tests
        return

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }
    qt_logger = logging.getLogger("swapdesk.qt")

    def _forward(kind, _context, message):  # type: ignore[no-untyped-def]
        qt_logger.log(levels.get(kind, logging.INFO), message)

    qInstallMessageHandler(_forward)
