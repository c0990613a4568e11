"""
Job ORM model.

Tracks background embedding regenerations triggered by document writes, so a
failed regeneration is visible instead of only logged.

Dependencies: sqlalchemy, knowledge_base.boundary.db.base
System role: Async job tracking for background tasks
"""

import enum

from sqlalchemy import JSON, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_base.boundary.db.base import Base, TimestampMixin, UUIDMixin


class JobType(str, enum.Enum):
    """
    Background job types.

    EMBEDDING_REGENERATION: Rebuild one document's chunk set
    """

    EMBEDDING_REGENERATION = "embedding_regeneration"


class JobStatus(str, enum.Enum):
    """
    Background task execution states.

    PENDING: Queued after the write, not started
    RUNNING: Regeneration in progress
    COMPLETED: Succeeded; result holds chunks_created
    FAILED: Failed; result holds error details
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class JobModel(Base, UUIDMixin, TimestampMixin):
    """
    One background regeneration.

    Created PENDING in the same commit as the document write; the worker
    records RUNNING, then COMPLETED with {collection, slug, chunks_created}
    or FAILED with {error, type, collection, slug}. Polled via /jobs/{id}.
    """

    __tablename__ = "jobs"

    task_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    type: Mapped[JobType] = mapped_column(Enum(JobType, native_enum=False), nullable=False)

    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False),
        nullable=False,
        default=JobStatus.PENDING,
    )

    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    result: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
