"""
Test suite for POST /chat.

System role: Verification of chat HTTP API endpoint
"""

from unittest.mock import AsyncMock

import pytest

from knowledge_base.api.deps import get_chat_service
from knowledge_base.application.services.chat_service import CANNED_NO_MATCH_ANSWER
from knowledge_base.boundary.db.connection import get_async_db
from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING
from knowledge_base.core.exceptions import UpstreamServiceError
from knowledge_base.models.chat import ChatResponse, Source


@pytest.fixture
def mock_chat_service(app) -> AsyncMock:
    """Install a mocked ChatService."""
    service = AsyncMock()
    app.dependency_overrides[get_chat_service] = lambda: service
    return service


class TestChatEndpoint:
    """Test suite for the chat endpoint."""

    def test_chat_should_return_answer_with_single_source(self, client, mock_chat_service) -> None:
        # Arrange
        mock_chat_service.answer.return_value = ChatResponse(
            answer="Work hours are 9 to 5.",
            sources=[Source(slug="work-hours", title="Work Hours Policy", url="/p/work-hours")],
        )

        # Act
        response = client.post("/api/v1/chat", json={"message": "what are the work hours?"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "answer": "Work hours are 9 to 5.",
            "sources": [{"slug": "work-hours", "title": "Work Hours Policy", "url": "/p/work-hours"}],
        }
        mock_chat_service.answer.assert_awaited_once_with("what are the work hours?")

    def test_chat_should_return_canned_answer_without_sources(self, client, mock_chat_service) -> None:
        mock_chat_service.answer.return_value = ChatResponse(answer=CANNED_NO_MATCH_ANSWER, sources=[])

        response = client.post("/api/v1/chat", json={"message": "hi ok?"})

        assert response.status_code == 200
        assert response.json()["sources"] == []

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"message": 42}])
    def test_chat_should_reject_invalid_message(self, client, mock_chat_service, body) -> None:
        response = client.post("/api/v1/chat", json=body)

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "Invalid request"
        assert payload["details"]["errors"]
        mock_chat_service.answer.assert_not_awaited()

    def test_chat_should_map_upstream_failure_to_500(self, client, mock_chat_service) -> None:
        mock_chat_service.answer.side_effect = UpstreamServiceError(
            "Failed to generate answer", service="generation", upstream_error="quota exceeded"
        )

        response = client.post("/api/v1/chat", json={"message": "question"})

        assert response.status_code == 500
        payload = response.json()
        assert payload["error"] == "Failed to generate answer"
        assert payload["details"]["upstream_error"] == "quota exceeded"
        assert "hint" in payload

    def test_chat_without_model_key_should_return_hint(self, client, app, unconfigured_llm) -> None:
        # Arrange: real chat service wiring, no database needed before the model fails
        app.dependency_overrides[get_async_db] = lambda: AsyncMock()

        # Act
        response = client.post("/api/v1/chat", json={"message": "what are the work hours?"})

        # Assert
        assert response.status_code == 500
        payload = response.json()
        assert payload["hint"] == API_KEY_HINT
        assert payload["details"] == {"setting": API_KEY_SETTING}
