"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, deterministic fake embeddings, document
factories, retrieval settings, and the FastAPI test client
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core, fastapi
System role: Test infrastructure and fixture management
"""

from typing import Callable
from unittest.mock import AsyncMock

import pytest
from langchain_core.embeddings import Embeddings

EMBEDDING_DIMENSION = 3


class FakeEmbeddings(Embeddings):
    """
    Deterministic embeddings for tests.

    Texts listed in `vectors` get that vector; everything else gets `default`.
    A text containing `fail_on` raises, simulating an upstream failure.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default if default is not None else [0.0] * EMBEDDING_DIMENSION
        self.fail_on = fail_on
        self.calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        if self.fail_on is not None and self.fail_on in text:
            raise RuntimeError(f"embedding backend unavailable for: {text[:20]}")
        return list(self.vectors.get(text, self.default))

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append([text])
        return self._vector(text)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from knowledge_base.boundary.db.base import Base
    import knowledge_base.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    """Provide embeddings that map every text to the zero vector."""
    return FakeEmbeddings()


@pytest.fixture
def embedding_client(fake_embeddings: FakeEmbeddings):
    """Provide EmbeddingClient over the fake embeddings."""
    from knowledge_base.boundary.llm.embedding_client import EmbeddingClient

    return EmbeddingClient(fake_embeddings, dimension=EMBEDDING_DIMENSION, timeout_seconds=5.0)


@pytest.fixture
def retrieval_settings():
    """Provide retrieval settings with the documented defaults."""
    from knowledge_base.configs.retrieval import RetrievalSettings

    return RetrievalSettings(
        chunk_max_size=1000,
        similarity_threshold=0.35,
        match_count=10,
        keyword_limit=5,
        max_keywords=5,
        min_keyword_length=3,
        keyword_chunk_max_chars=1200,
        synonym_rules_path=None,
    )


@pytest.fixture
def mock_answer_generator() -> AsyncMock:
    """Provide mock AnswerGenerator returning a fixed answer."""
    generator = AsyncMock()
    generator.generate = AsyncMock(return_value="Generated answer")
    return generator


@pytest.fixture
def make_article(test_async_db) -> Callable:
    """Factory creating committed articles in the test database."""
    from knowledge_base.boundary.db.CRUD.document_crud import article_crud
    from knowledge_base.boundary.db.models import DocumentStatus

    async def _make(
        slug: str,
        title: str = "Untitled",
        body_html: str = "",
        summary: str | None = None,
        status: DocumentStatus = DocumentStatus.APPROVED,
    ):
        article = await article_crud.create(
            test_async_db,
            slug=slug,
            title=title,
            summary=summary,
            body_html=body_html,
            audience=["All"],
            status=status,
        )
        await test_async_db.commit()
        return article

    return _make


@pytest.fixture
def make_profile(test_async_db) -> Callable:
    """Factory creating committed profiles in the test database."""
    from knowledge_base.boundary.db.CRUD.document_crud import profile_crud
    from knowledge_base.boundary.db.models import DocumentStatus

    async def _make(
        slug: str,
        first_name: str = "Jane",
        last_name: str = "Doe",
        job_title: str = "Engineer",
        description_html: str = "",
        clients: list[str] | None = None,
        status: DocumentStatus = DocumentStatus.APPROVED,
    ):
        profile = await profile_crud.create(
            test_async_db,
            slug=slug,
            first_name=first_name,
            last_name=last_name,
            job_title=job_title,
            description_html=description_html,
            clients=clients or [],
            email=f"{slug}@example.com",
            status=status,
        )
        await test_async_db.commit()
        return profile

    return _make


EDIT_TOKEN = "secret-token"


@pytest.fixture
def app():
    """Create the application with a known edit token."""
    from knowledge_base.api.deps import get_settings_dependency
    from knowledge_base.api.main import create_app
    from knowledge_base.configs import Settings
    from knowledge_base.configs.auth import AuthSettings

    app = create_app()
    app.dependency_overrides[get_settings_dependency] = lambda: Settings(
        auth=AuthSettings(edit_token=EDIT_TOKEN)
    )
    return app


@pytest.fixture
def client(app):
    """Provide TestClient for the app (no lifespan, no database)."""
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Edit-Token": EDIT_TOKEN}


@pytest.fixture
def unconfigured_llm(monkeypatch):
    """Make both model builders fail the way they do without a Google API key."""
    from knowledge_base.api.deps import dependencies
    from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING
    from knowledge_base.core.exceptions import ConfigurationError

    def _fail(settings):
        raise ConfigurationError("Model could not be configured", setting=API_KEY_SETTING, hint=API_KEY_HINT)

    monkeypatch.setattr(dependencies, "_service_cache", dependencies.ServiceCache())
    monkeypatch.setattr(dependencies, "build_embedding_client", _fail)
    monkeypatch.setattr(dependencies, "build_answer_generator", _fail)
