"""Adapters between the UI layer and the outside world."""
