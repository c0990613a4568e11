"""
Collection descriptors.

Articles and profiles share one retrieval pipeline. Each collection is
described by its CRUD singletons, the columns keyword search scans, and how
to turn a document into text, a title, and a public URL.

Dependencies: knowledge_base.boundary.db, knowledge_base.core.text
System role: Per-collection configuration for indexing and retrieval
"""

import enum
from dataclasses import dataclass
from typing import Callable

from knowledge_base.boundary.db.CRUD.chunk_crud import ChunkCRUD, article_chunk_crud, profile_chunk_crud
from knowledge_base.boundary.db.CRUD.document_crud import DocumentCRUD, article_crud, profile_crud
from knowledge_base.boundary.db.models import ArticleModel, ProfileModel
from knowledge_base.core.exceptions import ValidationError
from knowledge_base.core.text.chunker import build_document_text


class CollectionName(str, enum.Enum):
    ARTICLES = "articles"
    PROFILES = "profiles"


@dataclass(frozen=True)
class EmbeddingCollection:
    """
    Everything the pipeline needs to know about one collection.

    Attributes:
        name: Collection name
        document_crud: Slug-keyed document CRUD
        chunk_crud: Chunk table CRUD
        searchable_fields: Document attributes scanned by keyword search
        document_text: Builds the normalized text of a document
        title_of: Display title of a document
        url_prefix: Public URL prefix for citations
    """

    name: CollectionName
    document_crud: DocumentCRUD
    chunk_crud: ChunkCRUD
    searchable_fields: tuple[str, ...]
    document_text: Callable[[object], str]
    title_of: Callable[[object], str]
    url_prefix: str

    @property
    def document_model(self):
        return self.document_crud.model

    def searchable_columns(self) -> list:
        return [getattr(self.document_model, field) for field in self.searchable_fields]

    def url_for(self, slug: str) -> str:
        return f"{self.url_prefix}/{slug}"


def _article_text(article: ArticleModel) -> str:
    return build_document_text(article.title, article.summary, article.body_html)


def _profile_text(profile: ProfileModel) -> str:
    body = profile.description_html or ""
    if profile.clients:
        body = f"{body} Clients: {', '.join(profile.clients)}"
    return build_document_text(profile.display_title, profile.job_title, body)


ARTICLE_COLLECTION = EmbeddingCollection(
    name=CollectionName.ARTICLES,
    document_crud=article_crud,
    chunk_crud=article_chunk_crud,
    searchable_fields=("title", "summary", "body_html"),
    document_text=_article_text,
    title_of=lambda article: article.title,
    url_prefix="/p",
)

PROFILE_COLLECTION = EmbeddingCollection(
    name=CollectionName.PROFILES,
    document_crud=profile_crud,
    chunk_crud=profile_chunk_crud,
    searchable_fields=("first_name", "last_name", "job_title", "description_html"),
    document_text=_profile_text,
    title_of=lambda profile: profile.display_title,
    url_prefix="/people",
)

_COLLECTIONS = {
    CollectionName.ARTICLES: ARTICLE_COLLECTION,
    CollectionName.PROFILES: PROFILE_COLLECTION,
}


def get_collection(name: str | CollectionName) -> EmbeddingCollection:
    """
    Look up a collection by name.

    Raises:
        ValidationError: Unknown collection name
    """
    try:
        return _COLLECTIONS[CollectionName(name)]
    except ValueError as e:
        raise ValidationError(
            f"Unknown collection: {name}",
            field="collection",
            hint="Use 'articles' or 'profiles'",
        ) from e
