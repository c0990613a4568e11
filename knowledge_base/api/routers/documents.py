"""
Document API endpoints.

Routes:
- PUT/GET/DELETE /articles/{slug}
- PUT/GET/DELETE /profiles/{slug}

Writes require the X-Edit-Token header. A successful upsert returns at once
with a job id; embedding regeneration runs in the background. Without a
configured embedding model the document is still saved and its job is
marked failed with a hint.

Dependencies: knowledge_base.application.services, knowledge_base.api.deps
System role: Document HTTP API
"""

from fastapi import APIRouter, BackgroundTasks, Depends

from knowledge_base.api.deps import (
    get_article_service,
    get_optional_embedding_client,
    get_profile_service,
    get_settings_dependency,
    require_edit_token,
)
from knowledge_base.api.routers.router_utils.regeneration import schedule_regeneration
from knowledge_base.application.services import DocumentService
from knowledge_base.boundary.llm import EmbeddingClient
from knowledge_base.configs import Settings
from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING
from knowledge_base.core.exceptions import ConfigurationError
from knowledge_base.models.article import ArticleResponse, ArticleUpsertRequest
from knowledge_base.models.common import DeleteResponse, WriteAcceptedResponse
from knowledge_base.models.profile import ProfileResponse, ProfileUpsertRequest

articles_router = APIRouter(prefix="/articles", tags=["articles"])
profiles_router = APIRouter(prefix="/profiles", tags=["profiles"])


async def _save_and_schedule(
    slug: str,
    payload,
    document_service: DocumentService,
    background_tasks: BackgroundTasks,
    embedding_client: EmbeddingClient | None,
    settings: Settings,
) -> WriteAcceptedResponse:
    _, job_id = await document_service.save(slug, payload)
    if embedding_client is None:
        await document_service.skip_regeneration(
            job_id,
            slug,
            ConfigurationError(
                "Embedding model is not configured; document saved without embeddings",
                setting=API_KEY_SETTING,
                hint=API_KEY_HINT,
            ),
        )
        return WriteAcceptedResponse(job_id=job_id)

    schedule_regeneration(
        background_tasks,
        job_id,
        document_service.collection,
        slug,
        embedding_client,
        settings.retrieval.chunk_max_size,
    )
    return WriteAcceptedResponse(job_id=job_id)


@articles_router.put(
    "/{slug}",
    response_model=WriteAcceptedResponse,
    dependencies=[Depends(require_edit_token)],
)
async def upsert_article(
    slug: str,
    request: ArticleUpsertRequest,
    background_tasks: BackgroundTasks,
    article_service: DocumentService = Depends(get_article_service),
    embedding_client: EmbeddingClient | None = Depends(get_optional_embedding_client),
    settings: Settings = Depends(get_settings_dependency),
) -> WriteAcceptedResponse:
    """
    Create or update an article and queue its embedding regeneration.

    Returns:
        {"ok": true, "jobId": <uuid>}; poll /jobs/{jobId} for regeneration status
    """
    return await _save_and_schedule(
        slug, request, article_service, background_tasks, embedding_client, settings
    )


@articles_router.get("/{slug}", response_model=ArticleResponse)
async def get_article(
    slug: str,
    article_service: DocumentService = Depends(get_article_service),
) -> ArticleResponse:
    """Get an approved article. Drafts are reported as not found."""
    article = await article_service.get_approved(slug)
    return ArticleResponse.model_validate(article)


@articles_router.delete(
    "/{slug}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_edit_token)],
)
async def delete_article(
    slug: str,
    article_service: DocumentService = Depends(get_article_service),
) -> DeleteResponse:
    """Delete an article and all of its chunks."""
    await article_service.delete(slug)
    return DeleteResponse(deleted=slug)


@profiles_router.put(
    "/{slug}",
    response_model=WriteAcceptedResponse,
    dependencies=[Depends(require_edit_token)],
)
async def upsert_profile(
    slug: str,
    request: ProfileUpsertRequest,
    background_tasks: BackgroundTasks,
    profile_service: DocumentService = Depends(get_profile_service),
    embedding_client: EmbeddingClient | None = Depends(get_optional_embedding_client),
    settings: Settings = Depends(get_settings_dependency),
) -> WriteAcceptedResponse:
    """Create or update a profile and queue its embedding regeneration."""
    return await _save_and_schedule(
        slug, request, profile_service, background_tasks, embedding_client, settings
    )


@profiles_router.get("/{slug}", response_model=ProfileResponse)
async def get_profile(
    slug: str,
    profile_service: DocumentService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get an approved profile. Drafts are reported as not found."""
    profile = await profile_service.get_approved(slug)
    return ProfileResponse.model_validate(profile)


@profiles_router.delete(
    "/{slug}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_edit_token)],
)
async def delete_profile(
    slug: str,
    profile_service: DocumentService = Depends(get_profile_service),
) -> DeleteResponse:
    """Delete a profile and all of its chunks."""
    await profile_service.delete(slug)
    return DeleteResponse(deleted=slug)
