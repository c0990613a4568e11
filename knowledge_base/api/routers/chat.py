"""Chat API endpoints.

Routes:
- POST /chat - Answer a question from the knowledge base with one citation

Dependencies: knowledge_base.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from knowledge_base.api.deps import get_chat_service
from knowledge_base.application.services.chat_service import ChatService
from knowledge_base.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question from approved articles and profiles.

    Flow:
    1. Embed the question and search both collections
    2. Fall back to or augment with keyword search
    3. Generate an answer from the assembled context
    4. Return the answer with at most one source

    Returns:
        ChatResponse: {"answer", "sources": [{"slug", "title", "url"}]}

    Raises:
        UpstreamServiceError(500): Embedding or generation failed
        VectorStoreError(500): Retrieval query failed
    """
    return await chat_service.answer(request.message)
