"""
Article schemas.

Dependencies: pydantic
System role: Article API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from knowledge_base.boundary.db.models import DocumentStatus


class ArticleUpsertRequest(BaseModel):
    """Body of PUT /articles/{slug}."""

    title: str = Field(min_length=1)
    summary: str | None = None
    body_html: str = ""
    parent_slug: str | None = None
    audience: list[str] = Field(default_factory=lambda: ["All"])
    status: DocumentStatus = DocumentStatus.APPROVED


class ArticleResponse(BaseModel):
    """Stored article."""

    model_config = ConfigDict(from_attributes=True)

    slug: str
    title: str
    summary: str | None
    body_html: str
    parent_slug: str | None
    audience: list[str]
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
