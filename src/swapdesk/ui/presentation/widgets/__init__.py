from .status_bar import EnvironmentIndicator, StatusBar

__all__ = ["EnvironmentIndicator", "StatusBar"]
