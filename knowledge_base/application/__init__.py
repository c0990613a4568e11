"""Application services and background workers."""
