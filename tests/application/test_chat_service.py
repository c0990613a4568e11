"""
Unit tests for ChatService with a mocked retrieval orchestrator.

System role: Verification of answer assembly and the canned no-match path
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from knowledge_base.application.services.chat_service import CANNED_NO_MATCH_ANSWER, ChatService
from knowledge_base.core.exceptions import UpstreamServiceError
from knowledge_base.core.retrieval.orchestrator import RetrievalContext
from knowledge_base.core.retrieval.keyword_augmenter import KeywordMatch
from knowledge_base.core.retrieval.collections import CollectionName
from knowledge_base.models.chat import Source


@pytest.fixture
def mock_orchestrator() -> MagicMock:
    orchestrator = MagicMock()
    orchestrator.build_context = AsyncMock()
    return orchestrator


@pytest.fixture
def chat_service(mock_orchestrator, mock_answer_generator) -> ChatService:
    return ChatService(db=AsyncMock(), orchestrator=mock_orchestrator, answer_generator=mock_answer_generator)


class TestChatServiceAnswer:
    """Test suite for ChatService.answer()."""

    @pytest.mark.asyncio
    async def test_answer_should_return_generated_text_and_one_source(
        self, chat_service, mock_orchestrator, mock_answer_generator
    ) -> None:
        # Arrange
        citation = Source(slug="leave", title="Leave Policy", url="/p/leave")
        mock_orchestrator.build_context.return_value = RetrievalContext(
            context_text='[From "Leave Policy"]\nBook leave early.',
            primary_citation=citation,
            mode="fallback",
            keyword_matches=[KeywordMatch(CollectionName.ARTICLES, "leave", "Book leave early.")],
        )

        # Act
        response = await chat_service.answer("how do I book leave?")

        # Assert
        assert response.answer == "Generated answer"
        assert response.sources == [citation]
        mock_answer_generator.generate.assert_awaited_once_with(
            '[From "Leave Policy"]\nBook leave early.', "how do I book leave?"
        )

    @pytest.mark.asyncio
    async def test_answer_should_short_circuit_on_empty_context(
        self, chat_service, mock_orchestrator, mock_answer_generator
    ) -> None:
        mock_orchestrator.build_context.return_value = RetrievalContext()

        response = await chat_service.answer("anything")

        assert response.answer == CANNED_NO_MATCH_ANSWER
        assert response.sources == []
        mock_answer_generator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_answer_should_propagate_generation_failure(
        self, chat_service, mock_orchestrator, mock_answer_generator
    ) -> None:
        mock_orchestrator.build_context.return_value = RetrievalContext(
            context_text="x",
            primary_citation=Source(slug="a", title="A", url="/p/a"),
            mode="fallback",
            keyword_matches=[KeywordMatch(CollectionName.ARTICLES, "a", "x")],
        )
        mock_answer_generator.generate.side_effect = UpstreamServiceError("boom", service="generation")

        with pytest.raises(UpstreamServiceError):
            await chat_service.answer("anything")
