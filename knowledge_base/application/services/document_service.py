"""
Document service.

Upsert, public read, and deletion for articles and profiles. Deletion
removes the chunk set with the document and needs no embedding model.

Dependencies: sqlalchemy, knowledge_base.core.retrieval
System role: Document write/read orchestration
"""

import logging
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.application.services.job_service import JobService
from knowledge_base.boundary.db.models import JobType
from knowledge_base.core.exceptions import DocumentNotFoundError, KnowledgeBaseException, VectorStoreError
from knowledge_base.core.retrieval.collections import EmbeddingCollection

logger = logging.getLogger(__name__)


class DocumentService:
    """Slug-keyed document operations for one collection."""

    def __init__(self, db: AsyncSession, collection: EmbeddingCollection) -> None:
        self.db = db
        self.collection = collection

    async def upsert(self, slug: str, payload: BaseModel):
        """
        Create or overwrite a document. Flushes; the caller commits.

        Args:
            slug: Document key
            payload: Validated upsert request

        Returns:
            Stored document model
        """
        document = await self.collection.document_crud.upsert_by_slug(
            self.db, slug, **payload.model_dump()
        )
        logger.info(
            f"{__name__}:upsert - Saved {self.collection.name.value}/{slug}",
            extra={"status": document.status.value},
        )
        return document

    async def save(self, slug: str, payload: BaseModel) -> tuple[object, UUID]:
        """
        Upsert a document and record a pending regeneration job in one commit.

        Returns:
            (stored document, job id)
        """
        document = await self.upsert(slug, payload)
        job_id = await JobService(self.db).create_job(JobType.EMBEDDING_REGENERATION)
        await self.db.commit()
        return document, job_id

    async def get_approved(self, slug: str):
        """
        Fetch a published document.

        Raises:
            DocumentNotFoundError: Missing or not approved
        """
        document = await self.collection.document_crud.get_by_slug(self.db, slug, approved_only=True)
        if document is None:
            raise DocumentNotFoundError(self.collection.name.value, slug)
        return document

    async def skip_regeneration(self, job_id: UUID, slug: str, error: KnowledgeBaseException) -> None:
        """Mark a freshly created regeneration job failed without running it."""
        await JobService(self.db).mark_job_failed(
            job_id,
            error_details={
                "error": error.message,
                "type": type(error).__name__,
                "hint": error.hint,
                "collection": self.collection.name.value,
                "slug": slug,
            },
        )
        await self.db.commit()
        logger.warning(
            f"{__name__}:skip_regeneration - Saved {self.collection.name.value}/{slug} without embeddings",
            extra={"job_id": str(job_id), "error": error.message},
        )

    async def delete(self, slug: str) -> None:
        """
        Delete a document together with all of its chunks.

        Raises:
            DocumentNotFoundError: No document with this slug
            VectorStoreError: Deletion failed; transaction rolled back
        """
        document = await self.collection.document_crud.get_by_slug(self.db, slug)
        if document is None:
            raise DocumentNotFoundError(self.collection.name.value, slug)

        try:
            removed = await self.collection.chunk_crud.delete_for_document(self.db, document.id)
            await self.collection.document_crud.delete_by_id(self.db, document.id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise VectorStoreError(
                f"Failed to delete {slug}",
                operation="delete",
                details={"collection": self.collection.name.value, "slug": slug, "error": str(e)},
            ) from e

        logger.info(f"{__name__}:delete - Deleted {self.collection.name.value}/{slug} and {removed} chunks")
