"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, knowledge_base.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_base.api.deps.dependencies import get_service_cache
from knowledge_base.api.error_handlers import register_exception_handlers
from knowledge_base.boundary.db.connection import create_all_tables
from knowledge_base.configs import get_settings
from knowledge_base.observability import configure_logging
from knowledge_base.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    articles_router,
    chat_router,
    embeddings_router,
    health_router,
    jobs_router,
    profiles_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, optionally creates tables, and clears cached
    clients on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting Knowledge Base API ({settings.environment})")

    # Startup
    if settings.database.create_tables:
        await create_all_tables()
        logger.info("Database tables ensured")

    yield

    # Shutdown
    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Knowledge Base API",
        description="Policies and people knowledge base with retrieval-augmented chat",
        version="0.1.0",
        debug=get_settings().debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs outermost
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(articles_router, prefix="/api/v1")
    app.include_router(profiles_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")
    app.include_router(jobs_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "knowledge_base.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
