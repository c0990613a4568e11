"""
Job domain models and schemas.

Dependencies: pydantic
System role: Job status API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobStatusResponse(BaseModel):
    """Response schema for job status."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    task_id: str
    type: str
    status: str
    progress: int = Field(description="Progress percentage (0-100)")
    result: dict
    created_at: datetime
    updated_at: datetime
