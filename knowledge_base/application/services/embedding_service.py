"""
Embedding index service.

Keeps each document's chunk set a complete, current representation of its
latest body: every regeneration embeds all chunks first, then swaps the old
rows for the new ones in one transaction. An embedding failure therefore
leaves the previous set untouched.

Dependencies: sqlalchemy, knowledge_base.boundary, knowledge_base.core
System role: Embedding index lifecycle
"""

import asyncio
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.llm.embedding_client import EmbeddingClient
from knowledge_base.core.exceptions import DocumentNotFoundError, KnowledgeBaseException, VectorStoreError
from knowledge_base.core.retrieval.collections import EmbeddingCollection
from knowledge_base.core.text.chunker import DEFAULT_MAX_CHUNK_SIZE, chunk_text
from knowledge_base.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


@dataclass
class RegenerateAllResult:
    """Outcome of a bulk regeneration."""

    succeeded: dict[str, int] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)


class EmbeddingService:
    """Regenerates and removes per-document chunk sets."""

    def __init__(
        self,
        db: AsyncSession,
        embedding_client: EmbeddingClient,
        chunk_max_size: int = DEFAULT_MAX_CHUNK_SIZE,
    ) -> None:
        self.db = db
        self.embedding_client = embedding_client
        self.chunk_max_size = chunk_max_size

    async def regenerate(self, collection: EmbeddingCollection, slug: str) -> int:
        """
        Rebuild the chunk set of one document.

        Args:
            collection: Collection the document belongs to
            slug: Document key

        Returns:
            Number of chunks stored

        Raises:
            DocumentNotFoundError: No document with this slug
            UpstreamServiceError: Embedding failed; stored chunks unchanged
            VectorStoreError: Chunk persistence failed; transaction rolled back
        """
        document = await collection.document_crud.get_by_slug(self.db, slug)
        if document is None:
            raise DocumentNotFoundError(collection.name.value, slug)

        chunks = chunk_text(collection.document_text(document), self.chunk_max_size)
        logger.info(
            f"{__name__}:regenerate - {collection.name.value}/{slug}: {len(chunks)} chunks",
            extra={"collection": collection.name.value, "slug": slug},
        )

        vectors = await self.embedding_client.embed_many(chunks)

        try:
            count = await collection.chunk_crud.replace_for_document(
                self.db,
                document_id=document.id,
                document_slug=document.slug,
                chunks=list(zip(chunks, vectors)),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise VectorStoreError(
                f"Failed to store chunks for {slug}",
                operation="replace",
                details={"collection": collection.name.value, "slug": slug, "error": str(e)},
            ) from e

        logger.info(f"{__name__}:regenerate - Stored {count} chunks for {collection.name.value}/{slug}")
        return count

    async def regenerate_all(
        self,
        collection: EmbeddingCollection,
        delay_seconds: float = 0.0,
    ) -> RegenerateAllResult:
        """
        Regenerate every approved document of a collection, one at a time.

        A failing document is recorded and skipped; the run continues.

        Args:
            collection: Collection to rebuild
            delay_seconds: Pause between documents

        Returns:
            Per-slug chunk counts and failure messages
        """
        documents = await collection.document_crud.list_approved(self.db)
        slugs = [document.slug for document in documents]
        logger.info(f"{__name__}:regenerate_all - {len(slugs)} approved {collection.name.value}")

        result = RegenerateAllResult()
        for index, slug in enumerate(slugs):
            try:
                result.succeeded[slug] = await self.regenerate(collection, slug)
            except KnowledgeBaseException as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:regenerate_all - Failed to regenerate {slug}",
                    e,
                    collection=collection.name.value,
                    slug=slug,
                )
                await self.db.rollback()
                result.failed[slug] = e.message

            if delay_seconds and index < len(slugs) - 1:
                await asyncio.sleep(delay_seconds)

        logger.info(
            f"{__name__}:regenerate_all - Done: {result.success_count} succeeded, "
            f"{result.failure_count} failed"
        )
        return result
