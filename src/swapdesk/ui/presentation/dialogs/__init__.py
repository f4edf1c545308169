from .quick_pick import PickItem, Picker, QuickPickDialog

__all__ = ["PickItem", "Picker", "QuickPickDialog"]
