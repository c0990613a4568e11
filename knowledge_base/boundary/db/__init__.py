"""Relational persistence: engine, ORM models, and CRUD singletons."""
