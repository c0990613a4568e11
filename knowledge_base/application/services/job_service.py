"""
Job service orchestrator.

Coordinates job tracking and status reporting for background regenerations.

Dependencies: knowledge_base.boundary.db.CRUD, knowledge_base.boundary.db.models
System role: Job management orchestration
"""

from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.CRUD.job_crud import job_crud
from knowledge_base.boundary.db.models import JobModel, JobStatus, JobType
from knowledge_base.models.job import JobStatusResponse


class JobService:
    """Job lifecycle for background tasks. Callers commit."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_job(self, job_type: JobType, task_id: str | None = None) -> UUID:
        """
        Create new job record for background task tracking.

        Args:
            job_type: Type of job
            task_id: Unique task identifier; generated when omitted

        Returns:
            UUID: Created job ID
        """
        job = await job_crud.create(
            self.db,
            task_id=task_id or str(uuid4()),
            type=job_type,
            status=JobStatus.PENDING,
            progress=0,
            result={},
        )
        return job.id

    async def mark_job_running(self, job_id: UUID) -> None:
        await job_crud.mark_running(self.db, job_id)

    async def mark_job_completed(self, job_id: UUID, result_data: dict) -> None:
        await job_crud.mark_completed(self.db, job_id, result_data)

    async def mark_job_failed(self, job_id: UUID, error_details: dict) -> None:
        await job_crud.mark_failed(self.db, job_id, error_details)

    async def get_job(self, job_id: UUID) -> JobModel | None:
        return await job_crud.get_by_id(self.db, job_id)

    async def get_job_status(self, job_id: UUID) -> JobStatusResponse:
        """
        Get job status for polling.

        Raises:
            ValueError: If job not found
        """
        job = await job_crud.get_by_id(self.db, job_id)
        if not job:
            raise ValueError(f"Job {job_id} not found")
        return JobStatusResponse(
            id=job.id,
            task_id=job.task_id,
            type=job.type.value,
            status=job.status.value,
            progress=job.progress,
            result=job.result,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
