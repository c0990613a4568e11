"""
Generic async CRUD.

Id-keyed operations shared by the document, chunk, and job CRUD classes.
Nothing here commits: services decide where a unit of work ends.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Id-keyed operations for one model class.

    Attributes:
        model: Mapped class the operations target
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields) -> ModelT:
        """
        Insert a row and load server-side defaults.

        Returns:
            The flushed instance with id and timestamps populated
        """
        instance = self.model(**fields)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, session: AsyncSession, limit: int | None = None) -> Sequence[ModelT]:
        stmt = select(self.model).order_by(self.model.created_at)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(self, session: AsyncSession, id: UUID, **fields) -> ModelT | None:
        """
        Update columns of one row.

        Returns:
            The updated instance, None when no row has this id
        """
        stmt = update(self.model).where(self.model.id == id).values(**fields).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
