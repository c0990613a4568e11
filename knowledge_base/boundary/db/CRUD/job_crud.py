"""
Job CRUD operations.

A regeneration job moves PENDING -> RUNNING -> COMPLETED | FAILED. Each
transition is a single UPDATE ... RETURNING on the job row.

Dependencies: sqlalchemy, knowledge_base.boundary.db.models
System role: Job persistence operations for async task tracking
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_base.boundary.db.models import JobModel, JobStatus


class JobCRUD(BaseCRUD[JobModel]):
    """Job rows and their status transitions."""

    def __init__(self) -> None:
        super().__init__(JobModel)

    async def get_by_task_id(self, session: AsyncSession, task_id: str) -> JobModel | None:
        result = await session.execute(select(JobModel).where(JobModel.task_id == task_id))
        return result.scalar_one_or_none()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: JobStatus,
        progress: int | None = None,
        result_data: dict | None = None,
    ) -> JobModel | None:
        """
        Move a job to `status`, optionally setting progress and result.

        Returns:
            Updated job, None for an unknown id
        """
        fields = {"status": status}
        if progress is not None:
            fields["progress"] = progress
        if result_data is not None:
            fields["result"] = result_data
        return await self.update_by_id(session, id, **fields)

    async def mark_running(self, session: AsyncSession, id: UUID) -> JobModel | None:
        return await self.update_status(session, id, JobStatus.RUNNING, progress=0)

    async def mark_completed(self, session: AsyncSession, id: UUID, result_data: dict) -> JobModel | None:
        return await self.update_status(session, id, JobStatus.COMPLETED, 100, result_data)

    async def mark_failed(self, session: AsyncSession, id: UUID, error_details: dict) -> JobModel | None:
        # Progress is left where the worker stopped
        return await self.update_status(session, id, JobStatus.FAILED, result_data=error_details)


job_crud = JobCRUD()
