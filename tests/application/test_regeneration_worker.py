"""
Test suite for the background regeneration worker.

The worker opens its own session, so these tests point the session factory
at a file-backed SQLite database shared with the assertions.

System role: Verification of job status recording around regeneration
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from knowledge_base.application.workers.regeneration import run_regeneration_job
from knowledge_base.boundary.db.base import Base
from knowledge_base.boundary.db.CRUD.chunk_crud import article_chunk_crud
from knowledge_base.boundary.db.CRUD.document_crud import article_crud
from knowledge_base.boundary.db.CRUD.job_crud import job_crud
from knowledge_base.boundary.db.models import DocumentStatus, JobStatus, JobType
from knowledge_base.boundary.llm.embedding_client import EmbeddingClient
import knowledge_base.boundary.db.models  # noqa: F401

from conftest import EMBEDDING_DIMENSION, FakeEmbeddings


@pytest.fixture
async def session_factory(tmp_path, monkeypatch):
    """File-backed SQLite session factory installed as the worker's factory."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'worker.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(
        "knowledge_base.boundary.db.connection.get_async_session_factory",
        lambda: factory,
    )
    yield factory
    await engine.dispose()


@pytest.fixture
async def seeded_job(session_factory):
    """An approved article plus a pending regeneration job; returns the job id."""
    async with session_factory() as db:
        await article_crud.create(
            db,
            slug="work-hours",
            title="Work Hours Policy",
            body_html="<p>Our standard work hours are 9 to 5</p>",
            audience=["All"],
            status=DocumentStatus.APPROVED,
        )
        job = await job_crud.create(
            db,
            task_id="task-1",
            type=JobType.EMBEDDING_REGENERATION,
            status=JobStatus.PENDING,
            progress=0,
            result={},
        )
        await db.commit()
        return job.id


class TestRunRegenerationJob:
    """Test suite for run_regeneration_job()."""

    @pytest.mark.asyncio
    async def test_success_should_store_chunks_and_complete_job(self, session_factory, seeded_job) -> None:
        # Arrange
        client = EmbeddingClient(FakeEmbeddings(default=[1.0, 0.0, 0.0]), EMBEDDING_DIMENSION)

        # Act
        await run_regeneration_job(seeded_job, "articles", "work-hours", client, 1000)

        # Assert
        async with session_factory() as db:
            job = await job_crud.get_by_id(db, seeded_job)
            article = await article_crud.get_by_slug(db, "work-hours")
            assert job.status == JobStatus.COMPLETED
            assert job.progress == 100
            assert job.result == {"collection": "articles", "slug": "work-hours", "chunks_created": 1}
            assert await article_chunk_crud.count_for_document(db, article.id) == 1

    @pytest.mark.asyncio
    async def test_embedding_failure_should_mark_job_failed(self, session_factory, seeded_job) -> None:
        # Arrange
        client = EmbeddingClient(FakeEmbeddings(fail_on=""), EMBEDDING_DIMENSION)

        # Act
        await run_regeneration_job(seeded_job, "articles", "work-hours", client, 1000)

        # Assert
        async with session_factory() as db:
            job = await job_crud.get_by_id(db, seeded_job)
            assert job.status == JobStatus.FAILED
            assert job.result["type"] == "UpstreamServiceError"
            assert job.result["slug"] == "work-hours"

    @pytest.mark.asyncio
    async def test_missing_document_should_mark_job_failed(self, session_factory, seeded_job) -> None:
        client = EmbeddingClient(FakeEmbeddings(), EMBEDDING_DIMENSION)

        await run_regeneration_job(seeded_job, "profiles", "nobody", client, 1000)

        async with session_factory() as db:
            job = await job_crud.get_by_id(db, seeded_job)
            assert job.status == JobStatus.FAILED
            assert job.result["type"] == "DocumentNotFoundError"
            assert job.result["collection"] == "profiles"
