"""
Keyword augmenter.

Case-insensitive substring search over document fields. Used as a recall
backstop when vector search misses: on its own when vector search finds
nothing, and alongside vector matches for articles.

Dependencies: sqlalchemy, knowledge_base.core.retrieval
System role: Keyword retrieval stage of the retrieval pipeline
"""

import logging
import re
from dataclasses import dataclass
from typing import Collection, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.db.models import DocumentStatus
from knowledge_base.core.exceptions import VectorStoreError
from knowledge_base.core.retrieval.collections import CollectionName, EmbeddingCollection
from knowledge_base.core.retrieval.synonyms import DEFAULT_SYNONYM_RULES, SynonymRule, expand_synonyms
from knowledge_base.core.text.chunker import strip_html

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


def extract_keywords(query: str, max_keywords: int = 5, min_length: int = 3) -> list[str]:
    """
    Pull search keywords from a query.

    Lowercased alphanumeric tokens of at least min_length characters,
    deduplicated in first-seen order, at most max_keywords.
    """
    keywords: list[str] = []
    for token in _TOKEN_PATTERN.findall(query.lower()):
        if len(token) >= min_length and token not in keywords:
            keywords.append(token)
            if len(keywords) == max_keywords:
                break
    return keywords


@dataclass
class KeywordMatch:
    """A document found by keyword search, as a pseudo-chunk of its text."""

    collection: CollectionName
    document_slug: str
    content: str


class KeywordAugmenter:
    """Substring search over a collection's searchable columns."""

    def __init__(
        self,
        synonym_rules: Sequence[SynonymRule] | None = None,
        max_keywords: int = 5,
        min_keyword_length: int = 3,
        max_chunk_chars: int = 1200,
    ) -> None:
        self.synonym_rules = list(synonym_rules) if synonym_rules is not None else list(DEFAULT_SYNONYM_RULES)
        self.max_keywords = max_keywords
        self.min_keyword_length = min_keyword_length
        self.max_chunk_chars = max_chunk_chars

    def search_terms(self, query: str) -> list[str]:
        """Keywords followed by synonym expansions; empty when the query has no keywords."""
        keywords = extract_keywords(query, self.max_keywords, self.min_keyword_length)
        if not keywords:
            return []
        terms = list(keywords)
        for term in expand_synonyms(query, self.synonym_rules):
            if term not in terms:
                terms.append(term)
        return terms

    async def augment(
        self,
        session: AsyncSession,
        collection: EmbeddingCollection,
        query: str,
        exclude_keys: Collection[str] = (),
        limit: int = 5,
    ) -> list[KeywordMatch]:
        """
        Find approved documents whose fields contain any search term.

        Args:
            session: Async database session
            collection: Collection to search
            query: User question
            exclude_keys: Slugs to skip (already matched by vector search)
            limit: Maximum documents to return

        Returns:
            Pseudo-chunks ordered by slug

        Raises:
            VectorStoreError: The keyword query failed
        """
        terms = self.search_terms(query)
        if not terms:
            return []

        model = collection.document_model
        conditions = [
            column.icontains(term, autoescape=True)
            for column in collection.searchable_columns()
            for term in terms
        ]
        stmt = select(model).where(model.status == DocumentStatus.APPROVED, or_(*conditions))
        # Excluded before LIMIT so the limit counts only new documents.
        if exclude_keys:
            stmt = stmt.where(model.slug.not_in(list(exclude_keys)))
        stmt = stmt.order_by(model.slug).limit(limit)

        try:
            result = await session.execute(stmt)
            documents = result.scalars().all()
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Keyword query failed for {collection.name.value}",
                operation="keyword_search",
                details={"error": str(e)},
            ) from e

        logger.debug(
            f"{__name__}:augment - {collection.name.value}: {len(documents)} hits for {len(terms)} terms"
        )
        return [
            KeywordMatch(
                collection=collection.name,
                document_slug=document.slug,
                content=strip_html(collection.document_text(document))[: self.max_chunk_chars],
            )
            for document in documents
        ]
