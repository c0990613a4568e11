"""
Hybrid retrieval over the article and profile collections.

Exports:
  - ARTICLE_COLLECTION, PROFILE_COLLECTION, get_collection: Collection descriptors
  - SimilaritySearch, SimilarityMatch, cosine_similarity: Vector search
  - KeywordAugmenter, KeywordMatch, extract_keywords: Keyword backstop
  - SynonymRule, load_synonym_rules, expand_synonyms: Query expansion data
  - RetrievalOrchestrator, RetrievalContext: Context assembly
"""

from knowledge_base.core.retrieval.collections import (
    ARTICLE_COLLECTION,
    PROFILE_COLLECTION,
    CollectionName,
    EmbeddingCollection,
    get_collection,
)
from knowledge_base.core.retrieval.similarity import SimilarityMatch, SimilaritySearch, cosine_similarity
from knowledge_base.core.retrieval.synonyms import (
    DEFAULT_SYNONYM_RULES,
    SynonymRule,
    expand_synonyms,
    load_synonym_rules,
)
from knowledge_base.core.retrieval.keyword_augmenter import KeywordAugmenter, KeywordMatch, extract_keywords
from knowledge_base.core.retrieval.orchestrator import RetrievalContext, RetrievalOrchestrator

__all__ = [
    "ARTICLE_COLLECTION",
    "PROFILE_COLLECTION",
    "CollectionName",
    "EmbeddingCollection",
    "get_collection",
    "SimilarityMatch",
    "SimilaritySearch",
    "cosine_similarity",
    "DEFAULT_SYNONYM_RULES",
    "SynonymRule",
    "expand_synonyms",
    "load_synonym_rules",
    "KeywordAugmenter",
    "KeywordMatch",
    "extract_keywords",
    "RetrievalContext",
    "RetrievalOrchestrator",
]
