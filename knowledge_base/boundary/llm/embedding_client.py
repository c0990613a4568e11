"""
Embedding client.

Turns text into fixed-dimension vectors through any LangChain Embeddings
implementation. Every response is validated before it reaches the index: a
vector of the wrong length or with non-numeric entries is an upstream failure,
never something to store.

Dependencies: langchain_core, fastapi.concurrency, knowledge_base.configs
System role: Embedding boundary shared by indexing and query paths
"""

import asyncio
import logging
import numbers
from typing import Sequence

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings

from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING, LLMSettings
from knowledge_base.core.exceptions import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Validating async wrapper around a LangChain Embeddings model.

    Attributes:
        dimension: Expected vector length
        timeout_seconds: Per-call timeout, None for no limit
    """

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        timeout_seconds: float | None = None,
    ) -> None:
        self._embeddings = embeddings
        self.dimension = dimension
        self.timeout_seconds = timeout_seconds

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single query text.

        Raises:
            UpstreamServiceError: Call failed, timed out, or returned a malformed vector
        """
        vector = await self._call(self._embeddings.embed_query, text)
        return self._validate(vector)

    async def embed_many(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed several document texts in one call.

        Returns:
            One vector per input text, in input order

        Raises:
            UpstreamServiceError: Call failed, timed out, or returned malformed data
        """
        if not texts:
            return []

        vectors = await self._call(self._embeddings.embed_documents, list(texts))
        if not isinstance(vectors, list) or len(vectors) != len(texts):
            raise UpstreamServiceError(
                "Embedding service returned an unexpected number of vectors",
                service="embedding",
                details={
                    "expected": len(texts),
                    "received": len(vectors) if isinstance(vectors, list) else None,
                },
            )
        return [self._validate(vector) for vector in vectors]

    async def _call(self, func, payload):
        try:
            return await asyncio.wait_for(
                run_in_threadpool(func, payload),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"{__name__}:_call - Embedding request timed out",
                extra={"timeout_seconds": self.timeout_seconds},
            )
            raise UpstreamServiceError(
                "Embedding request timed out",
                service="embedding",
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except UpstreamServiceError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:_call - Embedding request failed: {type(e).__name__}",
                extra={"error": str(e)},
            )
            raise UpstreamServiceError(
                "Failed to generate embedding",
                service="embedding",
                upstream_error=str(e),
            ) from e

    def _validate(self, vector) -> list[float]:
        if not isinstance(vector, (list, tuple)) or len(vector) != self.dimension:
            raise UpstreamServiceError(
                "Embedding service returned a vector of the wrong dimension",
                service="embedding",
                details={
                    "expected_dimension": self.dimension,
                    "received_dimension": len(vector) if isinstance(vector, (list, tuple)) else None,
                },
            )
        if not all(
            isinstance(value, numbers.Real) and not isinstance(value, bool) for value in vector
        ):
            raise UpstreamServiceError(
                "Embedding service returned non-numeric vector values",
                service="embedding",
            )
        return [float(value) for value in vector]


def build_embedding_client(settings: LLMSettings) -> EmbeddingClient:
    """
    Create the production embedding client from settings.

    Args:
        settings: LLM configuration

    Returns:
        EmbeddingClient backed by FixedDimensionEmbeddings

    Raises:
        ConfigurationError: The model rejected its configuration, usually a missing API key
    """
    from knowledge_base.boundary.llm.embeddings_wrapper import FixedDimensionEmbeddings

    kwargs = {}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key

    try:
        embeddings = FixedDimensionEmbeddings(
            model=settings.embedding_model,
            output_dimensionality=settings.embedding_dimension,
            **kwargs,
        )
    except Exception as e:
        logger.error(
            f"{__name__}:build_embedding_client - Embedding model could not be configured",
            extra={"model": settings.embedding_model, "error": str(e)},
        )
        raise ConfigurationError(
            "Embedding model could not be configured",
            setting=API_KEY_SETTING,
            hint=API_KEY_HINT,
        ) from e
    return EmbeddingClient(
        embeddings,
        dimension=settings.embedding_dimension,
        timeout_seconds=settings.request_timeout_seconds,
    )
