"""
Embedding API endpoints.

Routes: POST /embeddings/{collection}/{slug}

Dependencies: knowledge_base.application.services.embedding_service
System role: Synchronous embedding regeneration HTTP API
"""

from fastapi import APIRouter, Depends

from knowledge_base.api.deps import get_embedding_service, require_edit_token
from knowledge_base.application.services import EmbeddingService
from knowledge_base.core.retrieval import get_collection
from knowledge_base.models.embedding import EmbeddingRegenerationResponse

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.post(
    "/{collection}/{slug}",
    response_model=EmbeddingRegenerationResponse,
    dependencies=[Depends(require_edit_token)],
)
async def regenerate_embeddings(
    collection: str,
    slug: str,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> EmbeddingRegenerationResponse:
    """
    Rebuild one document's chunk set and wait for the result.

    Args:
        collection: "articles" or "profiles"
        slug: Document key

    Returns:
        {"success": true, "chunksCreated": <int>}

    Raises:
        ValidationError(400): Unknown collection
        DocumentNotFoundError(404): No document with this slug
        UpstreamServiceError(500): Embedding failed; previous chunks kept
    """
    chunks_created = await embedding_service.regenerate(get_collection(collection), slug)
    return EmbeddingRegenerationResponse(chunks_created=chunks_created)
