"""
Declarative base and shared column mixins.

Every table (articles, profiles, chunk tables, jobs) uses a UUID primary key
and UTC created/updated timestamps. The generic Uuid type maps to native UUID
on PostgreSQL and to a CHAR(32) column on SQLite.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for all ORM models; create_all_tables() builds its metadata."""


class UUIDMixin:
    """UUID v4 primary key generated client-side on insert."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """
    Row timestamps.

    Attributes:
        created_at: Set once on insert
        updated_at: Refreshed by every ORM update, including upserts and job transitions
    """

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
