"""Core domain types shared by the services and UI layers."""

from .actions import ActionKind, ActionRequest
from .state import EMPTY_SNAPSHOT, StateSnapshot, parse_info_payload
from .versions import VersionEntry, parse_version_listing

__all__ = [
    "ActionKind",
    "ActionRequest",
    "EMPTY_SNAPSHOT",
    "StateSnapshot",
    "parse_info_payload",
    "VersionEntry",
    "parse_version_listing",
]
