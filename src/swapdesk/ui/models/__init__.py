"""Plain data models used by the UI layer."""
