"""
Retrieval orchestrator.

Runs vector search over both collections, falls back to or augments with
keyword search, resolves titles, and assembles the context text and the
single primary citation handed to the answer generator.

Only a successful empty vector search triggers the keyword fallback; a
failing vector query propagates as VectorStoreError. Augmenting vector
matches with keyword hits is best-effort: a failing keyword query is logged
and the vector matches are answered alone.

Dependencies: sqlalchemy, knowledge_base.boundary.llm, knowledge_base.core.retrieval
System role: Context assembly for the chat endpoint
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.llm.embedding_client import EmbeddingClient
from knowledge_base.configs.retrieval import RetrievalSettings
from knowledge_base.core.exceptions import VectorStoreError
from knowledge_base.core.retrieval.collections import (
    ARTICLE_COLLECTION,
    PROFILE_COLLECTION,
    CollectionName,
    EmbeddingCollection,
)
from knowledge_base.core.retrieval.keyword_augmenter import KeywordAugmenter, KeywordMatch
from knowledge_base.core.retrieval.similarity import SimilarityMatch, SimilaritySearch
from knowledge_base.models.chat import Source
from knowledge_base.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

RetrievalMode = Literal["vector", "augmented", "fallback", "empty"]


@dataclass
class RetrievalContext:
    """
    Assembled retrieval result for one question.

    Attributes:
        context_text: Entries formatted as [From "<title>"] blocks
        primary_citation: The single cited document, None when nothing matched
        mode: Which retrieval path produced the context
        article_matches, profile_matches: Vector matches per collection
        keyword_matches: Keyword pseudo-chunks included in the context
    """

    context_text: str = ""
    primary_citation: Source | None = None
    mode: RetrievalMode = "empty"
    article_matches: list[SimilarityMatch] = field(default_factory=list)
    profile_matches: list[SimilarityMatch] = field(default_factory=list)
    keyword_matches: list[KeywordMatch] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.article_matches or self.profile_matches or self.keyword_matches)


class RetrievalOrchestrator:
    """Hybrid vector and keyword retrieval over articles and profiles."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        keyword_augmenter: KeywordAugmenter,
        settings: RetrievalSettings,
        similarity_search: SimilaritySearch | None = None,
    ) -> None:
        self.embedding_client = embedding_client
        self.keyword_augmenter = keyword_augmenter
        self.settings = settings
        self.similarity_search = similarity_search or SimilaritySearch()

    async def build_context(self, session: AsyncSession, question: str) -> RetrievalContext:
        """
        Retrieve and assemble context for a question.

        Args:
            session: Async database session
            question: User question

        Returns:
            RetrievalContext; is_empty is True when nothing matched

        Raises:
            UpstreamServiceError: Query embedding failed
            VectorStoreError: A vector query or the fallback keyword query failed
        """
        query_vector = await self.embedding_client.embed(question)

        article_matches = await self._search(session, ARTICLE_COLLECTION, query_vector)
        profile_matches = await self._search(session, PROFILE_COLLECTION, query_vector)

        if not article_matches and not profile_matches:
            return await self._fallback(session, question)

        # Profiles are only keyword-searched in fallback mode.
        try:
            keyword_articles = await self.keyword_augmenter.augment(
                session,
                ARTICLE_COLLECTION,
                question,
                exclude_keys={match.document_slug for match in article_matches},
                limit=self.settings.keyword_limit,
            )
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:build_context - Keyword augmentation failed, continuing with vector matches",
                e,
                question_len=len(question),
                vector_matches=len(article_matches) + len(profile_matches),
            )
            keyword_articles = []

        titles = await self._resolve_titles(
            session,
            article_slugs=[m.document_slug for m in article_matches] + [k.document_slug for k in keyword_articles],
            profile_slugs=[m.document_slug for m in profile_matches],
        )

        entries = [
            self._format_entry(titles[(CollectionName.ARTICLES, m.document_slug)], m.content)
            for m in article_matches
        ]
        entries += [
            self._format_entry(titles[(CollectionName.ARTICLES, k.document_slug)], k.content)
            for k in keyword_articles
        ]
        entries += [
            self._format_entry(titles[(CollectionName.PROFILES, m.document_slug)], m.content)
            for m in profile_matches
        ]

        primary = self._pick_primary(article_matches, profile_matches)
        collection = ARTICLE_COLLECTION if primary.collection == CollectionName.ARTICLES else PROFILE_COLLECTION
        citation = self._citation(collection, primary.document_slug, titles[(primary.collection, primary.document_slug)])

        mode: RetrievalMode = "augmented" if keyword_articles else "vector"
        logger.info(
            f"{__name__}:build_context - mode={mode}, articles={len(article_matches)}, "
            f"profiles={len(profile_matches)}, keyword_articles={len(keyword_articles)}, "
            f"primary={citation.url}"
        )
        return RetrievalContext(
            context_text="\n\n".join(entries),
            primary_citation=citation,
            mode=mode,
            article_matches=article_matches,
            profile_matches=profile_matches,
            keyword_matches=keyword_articles,
        )

    async def _search(
        self,
        session: AsyncSession,
        collection: EmbeddingCollection,
        query_vector: list[float],
    ) -> list[SimilarityMatch]:
        return await self.similarity_search.search(
            session,
            collection,
            query_vector,
            threshold=self.settings.similarity_threshold,
            limit=self.settings.match_count,
        )

    async def _fallback(self, session: AsyncSession, question: str) -> RetrievalContext:
        article_hits = await self.keyword_augmenter.augment(
            session, ARTICLE_COLLECTION, question, limit=self.settings.keyword_limit
        )
        profile_hits = await self.keyword_augmenter.augment(
            session, PROFILE_COLLECTION, question, limit=self.settings.keyword_limit
        )

        if not article_hits and not profile_hits:
            logger.info(f"{__name__}:build_context - No vector or keyword matches")
            return RetrievalContext(mode="empty")

        titles = await self._resolve_titles(
            session,
            article_slugs=[hit.document_slug for hit in article_hits],
            profile_slugs=[hit.document_slug for hit in profile_hits],
        )
        entries = [
            self._format_entry(titles[(hit.collection, hit.document_slug)], hit.content)
            for hit in article_hits + profile_hits
        ]

        first = article_hits[0] if article_hits else profile_hits[0]
        collection = ARTICLE_COLLECTION if first.collection == CollectionName.ARTICLES else PROFILE_COLLECTION
        citation = self._citation(collection, first.document_slug, titles[(first.collection, first.document_slug)])

        logger.info(
            f"{__name__}:build_context - mode=fallback, keyword_articles={len(article_hits)}, "
            f"keyword_profiles={len(profile_hits)}, primary={citation.url}"
        )
        return RetrievalContext(
            context_text="\n\n".join(entries),
            primary_citation=citation,
            mode="fallback",
            keyword_matches=article_hits + profile_hits,
        )

    async def _resolve_titles(
        self,
        session: AsyncSession,
        article_slugs: list[str],
        profile_slugs: list[str],
    ) -> dict[tuple[CollectionName, str], str]:
        """One lookup per collection; unknown slugs fall back to the slug itself."""
        titles: dict[tuple[CollectionName, str], str] = {}
        for collection, slugs in (
            (ARTICLE_COLLECTION, article_slugs),
            (PROFILE_COLLECTION, profile_slugs),
        ):
            distinct = list(dict.fromkeys(slugs))
            documents = await collection.document_crud.get_by_slugs(session, distinct)
            for slug in distinct:
                document = documents.get(slug)
                titles[(collection.name, slug)] = collection.title_of(document) if document else slug
        return titles

    @staticmethod
    def _pick_primary(
        article_matches: list[SimilarityMatch],
        profile_matches: list[SimilarityMatch],
    ) -> SimilarityMatch:
        if not profile_matches:
            return article_matches[0]
        if not article_matches:
            return profile_matches[0]
        if article_matches[0].similarity >= profile_matches[0].similarity:
            return article_matches[0]
        return profile_matches[0]

    @staticmethod
    def _format_entry(title: str, content: str) -> str:
        return f'[From "{title}"]\n{content}'

    @staticmethod
    def _citation(collection: EmbeddingCollection, slug: str, title: str) -> Source:
        return Source(slug=slug, title=title, url=collection.url_for(slug))
