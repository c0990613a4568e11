"""Background task entrypoints."""
