"""
Similarity search.

Cosine similarity between a query vector and every stored chunk of the
approved documents in one collection, filtered by a threshold and ranked.

Dependencies: numpy, sqlalchemy, knowledge_base.core.retrieval.collections
System role: Vector retrieval stage of the retrieval pipeline
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.core.exceptions import VectorStoreError
from knowledge_base.core.retrieval.collections import CollectionName, EmbeddingCollection

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors; zero-norm vectors score 0.0."""
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)

    norm_a = np.linalg.norm(a_arr)
    norm_b = np.linalg.norm(b_arr)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a_arr, b_arr) / (norm_a * norm_b))


@dataclass
class SimilarityMatch:
    """A stored chunk scored against a query."""

    collection: CollectionName
    document_slug: str
    chunk_index: int
    content: str
    similarity: float
    rank: int


class SimilaritySearch:
    """Brute-force cosine search over a collection's chunk table."""

    async def search(
        self,
        session: AsyncSession,
        collection: EmbeddingCollection,
        query_vector: Sequence[float],
        threshold: float = 0.35,
        limit: int = 10,
    ) -> list[SimilarityMatch]:
        """
        Find the chunks most similar to the query.

        Scores below threshold are dropped. Equal scores order by document
        slug, then chunk index.

        Args:
            session: Async database session
            collection: Collection to search
            query_vector: Query embedding
            threshold: Minimum similarity to keep
            limit: Maximum matches to return

        Returns:
            Matches ranked from 1, best first

        Raises:
            VectorStoreError: The chunk query failed or stored vectors have a different dimension
        """
        try:
            rows = await collection.chunk_crud.list_searchable(session)
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:search - Chunk query failed for {collection.name.value}",
                extra={"error": str(e)},
            )
            raise VectorStoreError(
                f"Similarity query failed for {collection.name.value}",
                operation="search",
                details={"error": str(e)},
            ) from e

        if not rows:
            return []

        query = np.asarray(query_vector, dtype=float)
        scored = []
        for chunk, _document in rows:
            if len(chunk.embedding) != query.shape[0]:
                raise VectorStoreError(
                    "Stored embedding dimension does not match query dimension",
                    operation="search",
                    details={
                        "collection": collection.name.value,
                        "slug": chunk.document_slug,
                        "stored_dimension": len(chunk.embedding),
                        "query_dimension": int(query.shape[0]),
                    },
                )
            score = cosine_similarity(query, chunk.embedding)
            if score >= threshold:
                scored.append((score, chunk))

        scored.sort(key=lambda item: (-item[0], item[1].document_slug, item[1].chunk_index))

        matches = [
            SimilarityMatch(
                collection=collection.name,
                document_slug=chunk.document_slug,
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                similarity=score,
                rank=rank,
            )
            for rank, (score, chunk) in enumerate(scored[:limit], start=1)
        ]
        logger.debug(
            f"{__name__}:search - {collection.name.value}: {len(matches)} matches "
            f"from {len(rows)} chunks above {threshold}"
        )
        return matches
