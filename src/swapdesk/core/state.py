"""Snapshot of the swapenv project state as reported by ``swapenv info``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

__all__ = [
    "StateSnapshot",
    "EMPTY_SNAPSHOT",
    "PROJECT_KEYS",
    "ENVIRONMENT_KEYS",
    "ENVIRONMENT_LIST_KEYS",
    "parse_info_payload",
]

LOGGER = logging.getLogger(__name__)

# Candidate keys are tried in order; the first present, non-empty value wins.
PROJECT_KEYS: tuple[str, ...] = ("project", "name")
ENVIRONMENT_KEYS: tuple[str, ...] = ("environment", "env")
ENVIRONMENT_LIST_KEYS: tuple[str, ...] = ("envs", "environments")


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Immutable view of the project/environment state.

    ``project`` is the identity string reported by the tool, ``True`` when a
    project exists but carries no identity, or ``None`` when no project was
    detected.
    """

    project: str | bool | None = None
    active_environment: str | None = None
    known_environments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.project is None and (self.active_environment or self.known_environments):
            # Without a project the remaining fields carry no meaning.
            object.__setattr__(self, "active_environment", None)
            object.__setattr__(self, "known_environments", ())

    @property
    def has_project(self) -> bool:
        return self.project is not None and self.project is not False

    @property
    def status_text(self) -> str | None:
        """Text for the status indicator, or ``None`` when it should be hidden."""

        if not self.has_project:
            return None
        return self.active_environment or "no env"

    def is_active(self, environment: str) -> bool:
        return self.active_environment is not None and environment == self.active_environment


EMPTY_SNAPSHOT = StateSnapshot()


def parse_info_payload(text: str | None) -> StateSnapshot | None:
    """Parse ``swapenv info --format json`` output into a snapshot.

    Returns ``None`` for empty output, invalid JSON, non-object payloads and
    empty objects so callers can treat all of them as "no project".
    """

    if not text or not text.strip():
        return None
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        LOGGER.debug("Ignoring unparseable info payload: %s", exc)
        return None
    if not isinstance(payload, Mapping) or not payload:
        LOGGER.debug("Ignoring info payload of type %s", type(payload).__name__)
        return None

    project = _first_present(payload, PROJECT_KEYS)
    environment = _first_present(payload, ENVIRONMENT_KEYS)
    environments = _first_present(payload, ENVIRONMENT_LIST_KEYS)
    return StateSnapshot(
        project=str(project) if project is not None else True,
        active_environment=str(environment) if environment is not None else None,
        known_environments=_coerce_names(environments),
    )


def _first_present(payload: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = payload.get(key)
        if value not in (None, "", False):
            return value
    return None


def _coerce_names(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item)
