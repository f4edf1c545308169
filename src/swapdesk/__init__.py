"""SwapDesk: desktop status bar and menus for the swapenv CLI."""

__version__ = "0.1.0"

__all__ = ["__version__"]
