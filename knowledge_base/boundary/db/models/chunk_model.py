"""
Embedding chunk ORM models.

One table per collection. Each row is one chunk of a document's normalized
text with its embedding vector. A document exclusively owns its chunks; the
foreign key cascades on delete.

Dependencies: sqlalchemy, knowledge_base.boundary.db.base
System role: Embedding index persistence
"""

import uuid

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_base.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChunkColumnsMixin:
    """
    Columns shared by every chunk table.

    Attributes:
        document_slug: Owning document key (denormalized for filtering and citation)
        chunk_index: 0-based position in the document's text order
        content: HTML-stripped chunk text
        embedding: Float vector of the configured dimension
    """

    document_slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list] = mapped_column(JSON, nullable=False)


class ArticleChunkModel(Base, UUIDMixin, TimestampMixin, ChunkColumnsMixin):
    """Embedding chunk of an article."""

    __tablename__ = "article_chunks"
    __table_args__ = (UniqueConstraint("document_slug", "chunk_index"),)

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    )

    document = relationship("ArticleModel", back_populates="chunks")


class ProfileChunkModel(Base, UUIDMixin, TimestampMixin, ChunkColumnsMixin):
    """Embedding chunk of a people profile."""

    __tablename__ = "profile_chunks"
    __table_args__ = (UniqueConstraint("document_slug", "chunk_index"),)

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    document = relationship("ProfileModel", back_populates="chunks")
