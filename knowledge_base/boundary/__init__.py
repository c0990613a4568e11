"""Boundary adapters: database persistence and external model services."""
