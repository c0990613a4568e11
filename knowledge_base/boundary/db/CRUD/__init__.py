"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic async CRUD base
  - article_crud, profile_crud: Slug-keyed document CRUD singletons
  - article_chunk_crud, profile_chunk_crud: Embedding chunk CRUD singletons
  - job_crud: Job tracking CRUD singleton
"""

from knowledge_base.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_base.boundary.db.CRUD.document_crud import DocumentCRUD, article_crud, profile_crud
from knowledge_base.boundary.db.CRUD.chunk_crud import ChunkCRUD, article_chunk_crud, profile_chunk_crud
from knowledge_base.boundary.db.CRUD.job_crud import JobCRUD, job_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    "JobCRUD",
    "article_crud",
    "profile_crud",
    "article_chunk_crud",
    "profile_chunk_crud",
    "job_crud",
]
