"""
Document ORM models.

Articles (policies) and people profiles: the two authored document types.
Both are keyed by an immutable slug and carry a publication status; only
approved documents are visible to the public chat and read endpoints.

Dependencies: sqlalchemy, knowledge_base.boundary.db.base
System role: Document persistence
"""

import enum

from sqlalchemy import JSON, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_base.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Publication status.

    DRAFT: Saved but hidden from public reads and chat retrieval
    APPROVED: Published and retrievable
    """

    DRAFT = "draft"
    APPROVED = "approved"


class ArticleModel(Base, UUIDMixin, TimestampMixin):
    """
    Article ORM model.

    Attributes:
        slug: Unique human-readable key, immutable once chosen
        title: Article title
        summary: Optional subtitle shown under the title
        body_html: Rich-text body (HTML)
        parent_slug: Optional parent article for the navigation tree
        audience: Audience tags (default ["All"])
        status: DRAFT or APPROVED

    Relationships:
        chunks: Owned ArticleChunkModel rows (deleted with the article)
    """

    __tablename__ = "articles"

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    body_html: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_slug: Mapped[str | None] = mapped_column(String(255), nullable=True)
    audience: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["All"])
    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.APPROVED,
    )

    chunks = relationship(
        "ArticleChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def display_title(self) -> str:
        return self.title


class ProfileModel(Base, UUIDMixin, TimestampMixin):
    """
    People profile ORM model.

    Attributes:
        slug: Unique human-readable key, immutable once chosen
        first_name, last_name: Person's name
        job_title: Role shown under the name
        description_html: Rich-text biography (HTML)
        clients: Client names the person works with
        photo_url: Optional portrait URL
        email: Contact email
        status: DRAFT or APPROVED

    Relationships:
        chunks: Owned ProfileChunkModel rows (deleted with the profile)
    """

    __tablename__ = "profiles"

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    description_html: Mapped[str] = mapped_column(Text, nullable=False, default="")
    clients: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.APPROVED,
    )

    chunks = relationship(
        "ProfileChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def display_title(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
