"""
Write-gate configuration.

A single shared token authorizes every write operation.

Dependencies: pydantic, pydantic_settings
System role: Edit token configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_base.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Shared edit token settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    edit_token: str | None = Field(default=None, description="Value expected in X-Edit-Token")
