"""User settings and their JSON file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

__all__ = ["Settings", "SettingsStore", "DEFAULT_SETTINGS_PATH", "environment_overrides"]

LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".swapdesk" / "settings.json"
_SETTINGS_VERSION = 1
_BOOL_FIELDS = {
    "SWAPDESK_SHOW_NOTIFICATIONS": "show_notifications",
    "SWAPDESK_AUTO_REFRESH": "auto_refresh",
    "SWAPDESK_DEBUG_LOGGING": "debug_logging",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    """User-configurable settings persisted between sessions."""

    show_notifications: bool = True
    auto_refresh: bool = True
    executable: str = "swapenv"
    workspace_folders: list[str] = field(default_factory=list)
    debug_logging: bool = False

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Settings:
        """Build settings from a decoded JSON object.

        Unknown keys and values of the wrong type are dropped, so a hand-edited
        file degrades field by field instead of as a whole.
        """

        defaults = asdict(cls())
        accepted: Dict[str, Any] = {}
        for name, default in defaults.items():
            if name not in payload:
                continue
            value = payload[name]
            if isinstance(default, list):
                if isinstance(value, list) and all(isinstance(item, str) for item in value):
                    accepted[name] = list(value)
                    continue
            elif type(value) is type(default):
                accepted[name] = value
                continue
            LOGGER.warning("Ignoring setting %s=%r (expected %s)", name, value, type(default).__name__)
        return cls(**accepted)

    def merged(self, overrides: Mapping[str, Any], *, source: str) -> Settings:
        known = {item.name for item in fields(self)}
        applied = {key: value for key, value in overrides.items() if key in known and value is not None}
        if not applied:
            return self
        LOGGER.debug("Settings from %s: %s", source, sorted(applied))
        return replace(self, **applied)


def environment_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Settings values taken from ``SWAPDESK_*`` environment variables."""

    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    executable = env.get("SWAPDESK_EXECUTABLE", "").strip()
    if executable:
        overrides["executable"] = executable
    for variable, name in _BOOL_FIELDS.items():
        if variable in env:
            overrides[name] = env[variable].strip().lower() in _TRUE_VALUES
    return overrides


class SettingsStore:
    """Reads and writes :class:`Settings` as JSON.

    Precedence when loading: file, then command-line overrides, then the
    environment.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path).expanduser() if path else DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        settings = Settings.from_mapping(self._read())
        if overrides:
            settings = settings.merged(overrides, source="command line")
        return settings.merged(environment_overrides(), source="environment")

    def save(self, settings: Settings) -> Path:
        """Write ``settings`` through a temporary file so readers never see half a file."""

        body = json.dumps({"version": _SETTINGS_VERSION, **asdict(settings)}, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, tmp_name = tempfile.mkstemp(dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(body)
            os.replace(tmp_name, self._path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
        return self._path

    def _read(self) -> Mapping[str, Any]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            LOGGER.warning("Unable to read settings from %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return payload
