"""
Database models package.

Exports:
  - ArticleModel, ProfileModel, DocumentStatus: Document ORM models and status enum
  - ArticleChunkModel, ProfileChunkModel: Per-collection embedding chunk rows
  - JobModel, JobStatus, JobType: Job ORM model and related enums

Dependencies: sqlalchemy, knowledge_base.boundary.db.base
System role: Database model definitions for domain entities
"""

from knowledge_base.boundary.db.models.document_model import (
    ArticleModel,
    DocumentStatus,
    ProfileModel,
)
from knowledge_base.boundary.db.models.chunk_model import ArticleChunkModel, ProfileChunkModel
from knowledge_base.boundary.db.models.job_model import JobModel, JobStatus, JobType

__all__ = [
    "ArticleModel",
    "ProfileModel",
    "DocumentStatus",
    "ArticleChunkModel",
    "ProfileChunkModel",
    "JobModel",
    "JobStatus",
    "JobType",
]
