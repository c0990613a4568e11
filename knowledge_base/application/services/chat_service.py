"""
Chat service.

Answers a question from the knowledge base: retrieval, then generation,
with at most one cited source. When retrieval finds nothing the canned
answer is returned without calling the generator.

Dependencies: knowledge_base.core.retrieval, knowledge_base.boundary.llm
System role: Chat orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_base.boundary.llm.answer_generator import AnswerGenerator
from knowledge_base.core.retrieval.orchestrator import RetrievalOrchestrator
from knowledge_base.models.chat import ChatResponse

logger = logging.getLogger(__name__)

CANNED_NO_MATCH_ANSWER = (
    "I couldn't find any relevant information in our policies to answer that question. "
    "Could you please rephrase or ask something else?"
)


class ChatService:
    """Retrieval-augmented question answering."""

    def __init__(
        self,
        db: AsyncSession,
        orchestrator: RetrievalOrchestrator,
        answer_generator: AnswerGenerator,
    ) -> None:
        self.db = db
        self.orchestrator = orchestrator
        self.answer_generator = answer_generator

    async def answer(self, question: str) -> ChatResponse:
        """
        Answer a question with a single citation.

        Args:
            question: User question

        Returns:
            ChatResponse with 0 or 1 source

        Raises:
            UpstreamServiceError: Embedding or generation failed
            VectorStoreError: Retrieval query failed
        """
        logger.info(f"{__name__}:answer - START question_len={len(question)}")
        context = await self.orchestrator.build_context(self.db, question)

        if context.is_empty:
            logger.info(f"{__name__}:answer - No context found, returning canned answer")
            return ChatResponse(answer=CANNED_NO_MATCH_ANSWER, sources=[])

        answer = await self.answer_generator.generate(context.context_text, question)
        sources = [context.primary_citation] if context.primary_citation else []
        logger.info(f"{__name__}:answer - END mode={context.mode}, sources={len(sources)}")
        return ChatResponse(answer=answer, sources=sources)
