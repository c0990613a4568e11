"""
People profile schemas.

Dependencies: pydantic
System role: Profile API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knowledge_base.boundary.db.models import DocumentStatus


class ProfileUpsertRequest(BaseModel):
    """Body of PUT /profiles/{slug}."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    description_html: str = ""
    clients: list[str] = Field(default_factory=list)
    photo_url: str | None = None
    email: str = Field(min_length=3)
    status: DocumentStatus = DocumentStatus.APPROVED

    @field_validator("clients", mode="before")
    @classmethod
    def normalize_clients(cls, value: Any) -> list[str]:
        """Coerce entries to strings and drop empty ones."""
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("clients must be a list")
        return [str(item).strip() for item in value if item is not None and str(item).strip()]


class ProfileResponse(BaseModel):
    """Stored profile."""

    model_config = ConfigDict(from_attributes=True)

    slug: str
    first_name: str
    last_name: str
    job_title: str
    description_html: str
    clients: list[str]
    photo_url: str | None
    email: str
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
