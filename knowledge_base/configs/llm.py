"""
LLM configuration settings.

Embedding and answer-generation model settings. The same embedding model must
be used for chunk vectors and query vectors.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for embedding and generation clients
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_base.configs.base import BaseSettings

API_KEY_SETTING = "LLM_GOOGLE_API_KEY"
API_KEY_HINT = "Set LLM_GOOGLE_API_KEY (or GOOGLE_API_KEY) in the server environment"


class LLMSettings(BaseSettings):
    """Embedding and generation model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        description="Google Generative AI API key (falls back to GOOGLE_API_KEY)",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Fixed embedding vector dimension",
    )

    generation_model: str = Field(
        default="gemini-2.5-flash",
        description="Chat model ID used to write answers",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=500, ge=1)

    request_timeout_seconds: float | None = Field(
        default=60.0,
        description="Timeout for a single embedding or generation call; None uses client default",
    )
