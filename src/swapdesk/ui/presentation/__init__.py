"""Qt widgets and dialogs with headless fallbacks."""
