"""
Embedding regeneration schemas.

Dependencies: pydantic
System role: Embedding API contracts
"""

from pydantic import BaseModel, Field


class EmbeddingRegenerationResponse(BaseModel):
    """Result of a synchronous regeneration."""

    success: bool = True
    chunks_created: int = Field(serialization_alias="chunksCreated")
