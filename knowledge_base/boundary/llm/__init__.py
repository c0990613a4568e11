"""
External model clients.

Exports:
  - EmbeddingClient, build_embedding_client: Fixed-dimension text embedding
  - AnswerGenerator, build_answer_generator: Context-grounded answer writing
"""

from knowledge_base.boundary.llm.embedding_client import EmbeddingClient, build_embedding_client
from knowledge_base.boundary.llm.answer_generator import AnswerGenerator, build_answer_generator

__all__ = [
    "EmbeddingClient",
    "build_embedding_client",
    "AnswerGenerator",
    "build_answer_generator",
]
