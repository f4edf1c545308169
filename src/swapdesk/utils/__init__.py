"""Utility helpers shared across SwapDesk."""
