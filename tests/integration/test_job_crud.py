"""
Test suite for JobCRUD status transitions against an in-memory SQLite database.

System role: Verification of job persistence
"""

import pytest

from knowledge_base.boundary.db.CRUD.job_crud import job_crud
from knowledge_base.boundary.db.models import JobStatus, JobType


@pytest.fixture
async def pending_job(test_async_db):
    job = await job_crud.create(
        test_async_db,
        task_id="task-1",
        type=JobType.EMBEDDING_REGENERATION,
        status=JobStatus.PENDING,
        progress=0,
        result={},
    )
    await test_async_db.commit()
    return job


class TestJobCRUD:
    """Test suite for JobCRUD."""

    @pytest.mark.asyncio
    async def test_get_by_task_id_should_find_job(self, test_async_db, pending_job) -> None:
        job = await job_crud.get_by_task_id(test_async_db, "task-1")

        assert job is not None
        assert job.id == pending_job.id

    @pytest.mark.asyncio
    async def test_mark_completed_should_set_progress_and_result(self, test_async_db, pending_job) -> None:
        # Act
        job = await job_crud.mark_completed(
            test_async_db, pending_job.id, {"slug": "leave", "chunks_created": 2}
        )

        # Assert
        assert job.status == JobStatus.COMPLETED
        assert job.progress == 100
        assert job.result == {"slug": "leave", "chunks_created": 2}

    @pytest.mark.asyncio
    async def test_mark_failed_should_keep_progress(self, test_async_db, pending_job) -> None:
        await job_crud.mark_running(test_async_db, pending_job.id)

        job = await job_crud.mark_failed(test_async_db, pending_job.id, {"error": "boom"})

        assert job.status == JobStatus.FAILED
        assert job.progress == 0
        assert job.result == {"error": "boom"}
