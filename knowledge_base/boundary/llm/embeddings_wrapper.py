"""
Google embeddings pinned to one output dimensionality.

GoogleGenerativeAIEmbeddings does not apply output_dimensionality from its
constructor, yet every stored chunk vector must match the query vector
length. This subclass passes the configured dimension and a retrieval task
type on every call.

Dependencies: langchain_google_genai
System role: Production Embeddings implementation behind EmbeddingClient
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

DOCUMENT_TASK_TYPE = "RETRIEVAL_DOCUMENT"
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Chunk and question embeddings of a single, configured length."""

    _dimension: int = 1536

    def __init__(self, model: str, output_dimensionality: int = 1536, **kwargs) -> None:
        super().__init__(model=model, **kwargs)
        self._dimension = output_dimensionality
        logger.info(f"{__name__}:__init__ - model={model}, dimension={output_dimensionality}")

    def embed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        """Embed chunk texts for storage."""
        kwargs.setdefault("task_type", DOCUMENT_TASK_TYPE)
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._dimension
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> list[float]:
        """Embed a user question for similarity search."""
        kwargs.setdefault("task_type", QUERY_TASK_TYPE)
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._dimension
        return super().embed_query(text, **kwargs)
