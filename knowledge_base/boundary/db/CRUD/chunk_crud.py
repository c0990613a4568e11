"""
Embedding chunk CRUD operations.

Replace-not-append storage for a document's chunk set, plus the joined
listing of approved chunks that similarity search scans.

Dependencies: sqlalchemy, knowledge_base.boundary.db.models
System role: Embedding index persistence operations
"""

from typing import Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_base.boundary.db.models import (
    ArticleChunkModel,
    ArticleModel,
    DocumentStatus,
    ProfileChunkModel,
    ProfileModel,
)

ChunkT = TypeVar("ChunkT", ArticleChunkModel, ProfileChunkModel)


class ChunkCRUD(BaseCRUD[ChunkT]):
    """
    CRUD operations for one collection's chunk table.

    Attributes:
        model: Chunk model class
        document_model: Owning document model class
    """

    def __init__(self, model: type[ChunkT], document_model: type) -> None:
        super().__init__(model)
        self.document_model = document_model

    async def delete_for_document(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Delete every chunk owned by a document.

        Returns:
            Number of rows removed
        """
        stmt = delete(self.model).where(self.model.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def replace_for_document(
        self,
        session: AsyncSession,
        document_id: UUID,
        document_slug: str,
        chunks: Sequence[tuple[str, list[float]]],
    ) -> int:
        """
        Swap a document's chunk set for a new one.

        Old rows are deleted and the new rows inserted in the caller's
        transaction, so a rollback leaves the previous set in place.

        Args:
            session: Async database session
            document_id: Owning document UUID
            document_slug: Owning document key
            chunks: (content, embedding) pairs in text order

        Returns:
            Number of chunks stored
        """
        await self.delete_for_document(session, document_id)
        session.add_all(
            [
                self.model(
                    document_id=document_id,
                    document_slug=document_slug,
                    chunk_index=index,
                    content=content,
                    embedding=list(embedding),
                )
                for index, (content, embedding) in enumerate(chunks)
            ]
        )
        await session.flush()
        return len(chunks)

    async def list_for_document(self, session: AsyncSession, document_id: UUID) -> Sequence[ChunkT]:
        stmt = (
            select(self.model)
            .where(self.model.document_id == document_id)
            .order_by(self.model.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_for_document(self, session: AsyncSession, document_id: UUID) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.document_id == document_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def list_searchable(self, session: AsyncSession) -> Sequence[tuple[ChunkT, object]]:
        """
        List chunks whose owning document is approved.

        Returns:
            (chunk, document) rows ordered by slug then chunk index
        """
        stmt = (
            select(self.model, self.document_model)
            .join(self.document_model, self.model.document_id == self.document_model.id)
            .where(self.document_model.status == DocumentStatus.APPROVED)
            .order_by(self.model.document_slug, self.model.chunk_index)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


article_chunk_crud = ChunkCRUD(ArticleChunkModel, ArticleModel)
profile_chunk_crud = ChunkCRUD(ProfileChunkModel, ProfileModel)
