"""
Application services.

Exports:
  - ChatService: Retrieval-augmented answers
  - DocumentService: Article and profile upsert/read
  - EmbeddingService: Chunk index regeneration and document deletion
  - JobService: Background job tracking
"""

from knowledge_base.application.services.chat_service import CANNED_NO_MATCH_ANSWER, ChatService
from knowledge_base.application.services.document_service import DocumentService
from knowledge_base.application.services.embedding_service import EmbeddingService, RegenerateAllResult
from knowledge_base.application.services.job_service import JobService

__all__ = [
    "CANNED_NO_MATCH_ANSWER",
    "ChatService",
    "DocumentService",
    "EmbeddingService",
    "RegenerateAllResult",
    "JobService",
]
