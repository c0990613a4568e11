"""
Chat domain models and schemas.

Request/response schemas for the retrieval-augmented chat endpoint.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User question")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class Source(BaseModel):
    """Document cited by an answer."""

    slug: str
    title: str
    url: str = Field(description="Public path: /p/<slug> for articles, /people/<slug> for profiles")


class ChatResponse(BaseModel):
    """Response schema for chat messages. At most one source is returned."""

    answer: str
    sources: list[Source] = Field(default_factory=list)
