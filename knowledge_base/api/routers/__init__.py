"""API routers."""

from .chat import router as chat_router
from .documents import articles_router, profiles_router
from .embeddings import router as embeddings_router
from .health import router as health_router
from .jobs import router as jobs_router

__all__ = [
    "articles_router",
    "chat_router",
    "embeddings_router",
    "health_router",
    "jobs_router",
    "profiles_router",
]
