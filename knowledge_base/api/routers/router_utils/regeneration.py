"""
Regeneration scheduling helpers.

Dependencies: fastapi, knowledge_base.application.workers
System role: Hands document writes off to the background regeneration worker
"""

import logging
from uuid import UUID

from fastapi import BackgroundTasks

from knowledge_base.application.workers.regeneration import run_regeneration_job
from knowledge_base.boundary.llm.embedding_client import EmbeddingClient
from knowledge_base.core.retrieval.collections import EmbeddingCollection

logger = logging.getLogger(__name__)


def schedule_regeneration(
    background_tasks: BackgroundTasks,
    job_id: UUID,
    collection: EmbeddingCollection,
    slug: str,
    embedding_client: EmbeddingClient,
    chunk_max_size: int,
) -> None:
    """Queue embedding regeneration to run after the response is sent."""
    background_tasks.add_task(
        run_regeneration_job,
        job_id,
        collection.name.value,
        slug,
        embedding_client,
        chunk_max_size,
    )
    logger.info(
        "Queued embedding regeneration",
        extra={"job_id": str(job_id), "collection": collection.name.value, "slug": slug},
    )
