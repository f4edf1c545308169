"""Workspace folder tracking used to pick the swapenv working directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

__all__ = ["Workspace"]

LOGGER = logging.getLogger(__name__)


def _normalize_path(path: Path | str) -> Path:
    if isinstance(path, Path):
        return path.expanduser().resolve()
    return Path(path).expanduser().resolve()


class Workspace:
    """Ordered list of open folders; the first existing one is the project root."""

    def __init__(self, folders: Iterable[Path | str] = ()) -> None:
        self._folders: list[Path] = []
        self.set_folders(folders)

    def set_folders(self, folders: Iterable[Path | str]) -> None:
        normalized: list[Path] = []
        for folder in folders:
            if not str(folder).strip():
                continue
            path = _normalize_path(folder)
            if path not in normalized:
                normalized.append(path)
        self._folders = normalized
        LOGGER.debug("Workspace folders: %s", [str(path) for path in normalized])

    @property
    def folders(self) -> tuple[Path, ...]:
        return tuple(self._folders)

    def root(self) -> Path | None:
        """Return the first folder that exists on disk, or ``None``."""

        for folder in self._folders:
            if folder.is_dir():
                return folder
        return None
