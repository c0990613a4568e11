"""
Document CRUD operations.

Slug-keyed operations shared by articles and profiles: lookup, upsert,
delete, and the approved-only listings used by retrieval and bulk
regeneration.

Dependencies: sqlalchemy, knowledge_base.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_base.boundary.db.models import ArticleModel, DocumentStatus, ProfileModel

DocumentT = TypeVar("DocumentT", ArticleModel, ProfileModel)


class DocumentCRUD(BaseCRUD[DocumentT]):
    """
    CRUD operations for slug-keyed document models.

    Works with ArticleModel and ProfileModel; both expose slug and status.
    """

    async def get_by_slug(
        self,
        session: AsyncSession,
        slug: str,
        approved_only: bool = False,
    ) -> DocumentT | None:
        """
        Retrieve a document by slug.

        Args:
            session: Async database session
            slug: Document key
            approved_only: Hide drafts when True

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.slug == slug)
        if approved_only:
            stmt = stmt.where(self.model.status == DocumentStatus.APPROVED)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_by_slug(self, session: AsyncSession, slug: str, **fields) -> DocumentT:
        """
        Insert a document or overwrite the fields of the existing one.

        The slug itself is never changed by an update.

        Args:
            session: Async database session
            slug: Document key
            **fields: Column values to write

        Returns:
            The stored model instance
        """
        existing = await self.get_by_slug(session, slug)
        if existing is None:
            return await self.create(session, slug=slug, **fields)

        for key, value in fields.items():
            setattr(existing, key, value)
        await session.flush()
        await session.refresh(existing)
        return existing

    async def delete_by_slug(self, session: AsyncSession, slug: str) -> bool:
        stmt = delete(self.model).where(self.model.slug == slug)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def list_approved(self, session: AsyncSession) -> Sequence[DocumentT]:
        """Return every approved document ordered by slug."""
        stmt = (
            select(self.model)
            .where(self.model.status == DocumentStatus.APPROVED)
            .order_by(self.model.slug)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_slugs(self, session: AsyncSession, slugs: Sequence[str]) -> dict[str, DocumentT]:
        """
        Fetch several documents at once.

        Returns:
            Mapping of slug to model for the slugs that exist
        """
        if not slugs:
            return {}
        stmt = select(self.model).where(self.model.slug.in_(list(slugs)))
        result = await session.execute(stmt)
        return {doc.slug: doc for doc in result.scalars().all()}


article_crud = DocumentCRUD(ArticleModel)
profile_crud = DocumentCRUD(ProfileModel)
