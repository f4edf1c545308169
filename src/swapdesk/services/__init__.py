"""Service layer helpers (settings, swapenv runner)."""

from .runner import CommandRunner, RunResult, SwapenvRunner
from .settings import Settings, SettingsStore
from .workspace import Workspace

__all__ = [
    "CommandRunner",
    "RunResult",
    "SwapenvRunner",
    "Settings",
    "SettingsStore",
    "Workspace",
]
