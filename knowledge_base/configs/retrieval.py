"""
Retrieval configuration settings.

Thresholds and limits for chunking, similarity search, and keyword augmentation.

Dependencies: pydantic, pydantic_settings
System role: Retrieval pipeline tuning
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_base.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Retrieval pipeline configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_max_size: int = Field(default=1000, ge=1, description="Max characters per chunk")

    similarity_threshold: float = Field(
        default=0.35,
        description="Minimum cosine similarity for a vector match",
    )
    match_count: int = Field(default=10, ge=1, description="Vector matches per collection")

    keyword_limit: int = Field(default=5, ge=1, description="Keyword hits per collection")
    max_keywords: int = Field(default=5, ge=1)
    min_keyword_length: int = Field(default=3, ge=1)
    keyword_chunk_max_chars: int = Field(default=1200, ge=1)

    synonym_rules_path: str | None = Field(
        default=None,
        description="JSON file with synonym rules; built-in rules are used when unset",
    )

    regenerate_all_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Pause between documents during bulk regeneration",
    )
