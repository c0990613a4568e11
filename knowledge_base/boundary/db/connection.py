"""
Database connection management.

One async engine and one session factory per process, both built lazily from
DatabaseSettings. Request handlers get a session through get_async_db; the
background worker and the bulk script open their own from the factory.

Dependencies: sqlalchemy, knowledge_base.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from knowledge_base.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Build the process-wide async engine.

    PostgreSQL gets a sized pool with pre-ping; SQLite URLs (local runs)
    use the driver's default pool, which rejects sizing arguments.
    """
    db_config = get_settings().database
    url = db_config.async_database_url

    if db_config.is_sqlite:
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the shared engine.

    Sessions never autoflush and keep attributes loaded after commit, so
    services decide when to flush and can read results after committing.
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with get_async_session_factory()() as session:
        yield session


async def create_all_tables() -> None:
    """Create every registered table that does not exist yet."""
    from knowledge_base.boundary.db.base import Base
    import knowledge_base.boundary.db.models  # noqa: F401  registers models

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
