"""API-specific dependencies."""

from .dependencies import (
    get_answer_generator,
    get_article_service,
    get_chat_service,
    get_embedding_client,
    get_embedding_service,
    get_job_service,
    get_optional_embedding_client,
    get_profile_service,
    get_service_cache,
    get_settings_dependency,
    get_synonym_rules,
    require_edit_token,
)

__all__ = [
    "get_answer_generator",
    "get_article_service",
    "get_chat_service",
    "get_embedding_client",
    "get_embedding_service",
    "get_job_service",
    "get_optional_embedding_client",
    "get_profile_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_synonym_rules",
    "require_edit_token",
]
