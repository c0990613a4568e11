"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: knowledge_base.configs, knowledge_base.application, knowledge_base.boundary
System role: DI container for service injection
"""

import logging
import secrets
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.application.services import (
    ChatService,
    DocumentService,
    EmbeddingService,
    JobService,
)
from knowledge_base.boundary.db.connection import get_async_db
from knowledge_base.boundary.llm import (
    AnswerGenerator,
    EmbeddingClient,
    build_answer_generator,
    build_embedding_client,
)
from knowledge_base.configs import Settings, get_settings
from knowledge_base.core.exceptions import ConfigurationError, UnauthorizedError
from knowledge_base.core.retrieval import (
    ARTICLE_COLLECTION,
    PROFILE_COLLECTION,
    KeywordAugmenter,
    RetrievalOrchestrator,
    SynonymRule,
    load_synonym_rules,
)

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._embedding_client = None
        self._answer_generator = None
        self._synonym_rules = None

    @property
    def embedding_client(self) -> EmbeddingClient:
        """Get cached embedding client."""
        if self._embedding_client is None:
            self._embedding_client = build_embedding_client(get_settings().llm)
        return self._embedding_client

    @property
    def answer_generator(self) -> AnswerGenerator:
        """Get cached answer generator."""
        if self._answer_generator is None:
            self._answer_generator = build_answer_generator(get_settings().llm)
        return self._answer_generator

    @property
    def synonym_rules(self) -> list[SynonymRule]:
        """Get cached synonym rules (built-in rules unless a rules file is configured)."""
        if self._synonym_rules is None:
            self._synonym_rules = load_synonym_rules(get_settings().retrieval.synonym_rules_path)
        return self._synonym_rules

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_client = None
        self._answer_generator = None
        self._synonym_rules = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_embedding_client() -> EmbeddingClient:
    return get_service_cache().embedding_client


def get_optional_embedding_client() -> EmbeddingClient | None:
    """
    Get the embedding client, or None when the model is not configured.

    Document writes still succeed without it; only regeneration is skipped.
    """
    try:
        return get_service_cache().embedding_client
    except ConfigurationError as e:
        logger.warning(
            f"{__name__}:get_optional_embedding_client - Embedding model unavailable",
            extra={"error": e.message, "setting": e.details.get("setting")},
        )
        return None


def get_answer_generator() -> AnswerGenerator:
    return get_service_cache().answer_generator


def get_synonym_rules() -> list[SynonymRule]:
    return get_service_cache().synonym_rules


def require_edit_token(
    x_edit_token: str | None = Header(default=None, alias="X-Edit-Token"),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Gate write endpoints behind the shared edit token.

    Raises:
        ConfigurationError: EDIT_TOKEN is not configured on the server
        UnauthorizedError: 401 when the header is missing, 403 when it is wrong
    """
    expected = settings.auth.edit_token
    if not expected:
        raise ConfigurationError("Edit token is not configured", setting="EDIT_TOKEN")
    if not x_edit_token:
        raise UnauthorizedError("Missing edit token", status_code=401)
    if not secrets.compare_digest(x_edit_token.encode(), expected.encode()):
        raise UnauthorizedError("Invalid edit token", status_code=403)


def get_job_service(db: AsyncSession = Depends(get_async_db)) -> JobService:
    """
    Get job service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        JobService: Job service instance
    """
    return JobService(db=db)


def get_article_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    return DocumentService(db=db, collection=ARTICLE_COLLECTION)


def get_profile_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    return DocumentService(db=db, collection=PROFILE_COLLECTION)


def get_embedding_service(
    db: AsyncSession = Depends(get_async_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
    settings: Settings = Depends(get_settings_dependency),
) -> EmbeddingService:
    """
    Get embedding service instance.

    Returns:
        EmbeddingService: Regeneration over the request session
    """
    return EmbeddingService(
        db=db,
        embedding_client=embedding_client,
        chunk_max_size=settings.retrieval.chunk_max_size,
    )


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
    answer_generator: AnswerGenerator = Depends(get_answer_generator),
    synonym_rules: list[SynonymRule] = Depends(get_synonym_rules),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service instance with the retrieval pipeline.

    Returns:
        ChatService: Chat service with configured orchestrator and generator
    """
    retrieval = settings.retrieval
    orchestrator = RetrievalOrchestrator(
        embedding_client=embedding_client,
        keyword_augmenter=KeywordAugmenter(
            synonym_rules=synonym_rules,
            max_keywords=retrieval.max_keywords,
            min_keyword_length=retrieval.min_keyword_length,
            max_chunk_chars=retrieval.keyword_chunk_max_chars,
        ),
        settings=retrieval,
    )
    return ChatService(db=db, orchestrator=orchestrator, answer_generator=answer_generator)
