"""
Background embedding regeneration.

Runs after a document write has been acknowledged. Opens its own database
session, records progress on the job row, and never raises: failures are
logged and stored on the job.

Dependencies: knowledge_base.application.services, knowledge_base.boundary.db
System role: Fire-and-forget regeneration worker
"""

import logging
from uuid import UUID

from knowledge_base.boundary.llm.embedding_client import EmbeddingClient
from knowledge_base.core.retrieval.collections import get_collection
from knowledge_base.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


async def run_regeneration_job(
    job_id: UUID,
    collection_name: str,
    slug: str,
    embedding_client: EmbeddingClient,
    chunk_max_size: int,
) -> None:
    """
    Background task for one document's embedding regeneration.

    Args:
        job_id: Job UUID for status tracking
        collection_name: "articles" or "profiles"
        slug: Document key
        embedding_client: Client used to embed chunks
        chunk_max_size: Chunker bound
    """
    from knowledge_base.application.services.embedding_service import EmbeddingService
    from knowledge_base.application.services.job_service import JobService
    from knowledge_base.boundary.db.connection import get_async_session_factory

    logger.info(
        "Starting background embedding regeneration",
        extra={"job_id": str(job_id), "collection": collection_name, "slug": slug},
    )

    # Create fresh async session for background task
    SessionFactory = get_async_session_factory()

    async with SessionFactory() as db:
        job_service = JobService(db=db)
        try:
            await job_service.mark_job_running(job_id)
            await db.commit()

            embedding_service = EmbeddingService(
                db=db,
                embedding_client=embedding_client,
                chunk_max_size=chunk_max_size,
            )
            chunks_created = await embedding_service.regenerate(get_collection(collection_name), slug)

            await job_service.mark_job_completed(
                job_id,
                result_data={
                    "collection": collection_name,
                    "slug": slug,
                    "chunks_created": chunks_created,
                },
            )
            await db.commit()
            logger.info(
                "Embedding regeneration completed",
                extra={"job_id": str(job_id), "chunks_created": chunks_created},
            )

        except Exception as e:
            log_exception_with_context(
                logger,
                "Embedding regeneration failed",
                e,
                job_id=str(job_id),
                collection=collection_name,
                slug=slug,
            )
            await db.rollback()
            try:
                await job_service.mark_job_failed(
                    job_id,
                    error_details={
                        "error": str(e),
                        "type": type(e).__name__,
                        "collection": collection_name,
                        "slug": slug,
                    },
                )
                await db.commit()
            except Exception as inner_e:
                logger.exception(
                    "Failed to record job failure",
                    extra={"job_id": str(job_id), "inner_error": str(inner_e)},
                )
