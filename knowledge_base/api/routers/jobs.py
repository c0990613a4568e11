"""
Job API endpoints.

Routes: GET /jobs/{id}

Dependencies: knowledge_base.application.services.job_service, knowledge_base.models
System role: Job status HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge_base.api.deps import get_job_service
from knowledge_base.application.services.job_service import JobService
from knowledge_base.models.job import JobStatusResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}", response_model=JobStatusResponse)
async def get_job_status(
    job_id: UUID,
    job_service: JobService = Depends(get_job_service),
) -> JobStatusResponse:
    """
    Get regeneration job status for polling.

    Example Response:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "task_id": "8f7c...",
            "type": "embedding_regeneration",
            "status": "completed",
            "progress": 100,
            "result": {"collection": "articles", "slug": "work-hours", "chunks_created": 3},
            "created_at": "2025-01-01T12:00:00Z",
            "updated_at": "2025-01-01T12:00:05Z"
        }

    Raises:
        HTTPException(404): Job not found
    """
    try:
        return await job_service.get_job_status(job_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
