"""
Common response models.

Write acknowledgements and the error envelope shared by every endpoint.

Dependencies: pydantic
System role: Common API response structures
"""

import uuid

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(description="Error message")
    hint: str | None = Field(default=None, description="Suggestion for resolving the error")
    details: dict | None = Field(default=None, description="Additional error context")


class WriteAcceptedResponse(BaseModel):
    """Document saved; embedding regeneration queued as a job."""

    ok: bool = True
    job_id: uuid.UUID = Field(serialization_alias="jobId")


class DeleteResponse(BaseModel):
    """Document and its chunks removed."""

    ok: bool = True
    deleted: str = Field(description="Slug of the deleted document")
