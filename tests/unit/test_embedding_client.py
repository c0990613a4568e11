"""
Unit tests for EmbeddingClient response validation and error wrapping.

Dependencies: pytest, langchain_core
System role: Embedding boundary validation
"""

import pytest
from langchain_core.embeddings import Embeddings

from knowledge_base.boundary.llm.embedding_client import EmbeddingClient, build_embedding_client
from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING, LLMSettings
from knowledge_base.core.exceptions import ConfigurationError, UpstreamServiceError

from conftest import FakeEmbeddings


class StaticEmbeddings(Embeddings):
    """Returns canned payloads regardless of input."""

    def __init__(self, query_result=None, documents_result=None) -> None:
        self.query_result = query_result
        self.documents_result = documents_result

    def embed_query(self, text):
        return self.query_result

    def embed_documents(self, texts):
        return self.documents_result


class TestEmbed:
    """Test suite for EmbeddingClient.embed()."""

    @pytest.mark.asyncio
    async def test_embed_should_return_float_vector(self) -> None:
        # Arrange
        client = EmbeddingClient(StaticEmbeddings(query_result=[1, 0, 2]), dimension=3)

        # Act
        vector = await client.embed("hello")

        # Assert
        assert vector == [1.0, 0.0, 2.0]
        assert all(isinstance(value, float) for value in vector)

    @pytest.mark.asyncio
    async def test_embed_should_reject_wrong_dimension(self) -> None:
        client = EmbeddingClient(StaticEmbeddings(query_result=[0.1, 0.2]), dimension=3)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.embed("hello")

        assert exc_info.value.details["expected_dimension"] == 3
        assert exc_info.value.details["received_dimension"] == 2

    @pytest.mark.asyncio
    async def test_embed_should_reject_non_numeric_values(self) -> None:
        client = EmbeddingClient(StaticEmbeddings(query_result=[0.1, "x", 0.3]), dimension=3)

        with pytest.raises(UpstreamServiceError, match="non-numeric"):
            await client.embed("hello")

    @pytest.mark.asyncio
    async def test_embed_should_wrap_backend_errors(self) -> None:
        client = EmbeddingClient(FakeEmbeddings(fail_on="hello"), dimension=3)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.embed("hello")

        assert exc_info.value.details["service"] == "embedding"
        assert exc_info.value.status_code == 500


class TestEmbedMany:
    """Test suite for EmbeddingClient.embed_many()."""

    @pytest.mark.asyncio
    async def test_embed_many_should_skip_call_for_empty_input(self) -> None:
        embeddings = FakeEmbeddings()
        client = EmbeddingClient(embeddings, dimension=3)

        assert await client.embed_many([]) == []
        assert embeddings.calls == []

    @pytest.mark.asyncio
    async def test_embed_many_should_preserve_order(self) -> None:
        embeddings = FakeEmbeddings(vectors={"a": [1.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0]})
        client = EmbeddingClient(embeddings, dimension=3)

        vectors = await client.embed_many(["b", "a"])

        assert vectors == [[0.0, 1.0, 0.0], [1.0, 0.0, 0.0]]
        assert embeddings.calls == [["b", "a"]]

    @pytest.mark.asyncio
    async def test_embed_many_should_reject_count_mismatch(self) -> None:
        client = EmbeddingClient(StaticEmbeddings(documents_result=[[0.0, 0.0, 0.0]]), dimension=3)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.embed_many(["one", "two"])

        assert exc_info.value.details["expected"] == 2
        assert exc_info.value.details["received"] == 1


class TestBuildEmbeddingClient:
    """Test suite for build_embedding_client()."""

    def test_build_should_forward_model_settings(self, monkeypatch) -> None:
        captured = {}

        class RecordingEmbeddings(FakeEmbeddings):
            def __init__(self, **kwargs) -> None:
                super().__init__()
                captured.update(kwargs)

        monkeypatch.setattr(
            "knowledge_base.boundary.llm.embeddings_wrapper.FixedDimensionEmbeddings", RecordingEmbeddings
        )
        settings = LLMSettings(google_api_key="key-123", embedding_dimension=768, request_timeout_seconds=5.0)

        client = build_embedding_client(settings)

        assert captured == {
            "model": settings.embedding_model,
            "output_dimensionality": 768,
            "google_api_key": "key-123",
        }
        assert client.dimension == 768
        assert client.timeout_seconds == 5.0

    def test_build_without_api_key_should_raise_configuration_error(self, monkeypatch) -> None:
        # Arrange: the Google client refuses to construct without credentials
        class MissingKeyEmbeddings:
            def __init__(self, **kwargs) -> None:
                raise ValueError("Did not find google_api_key")

        monkeypatch.setattr(
            "knowledge_base.boundary.llm.embeddings_wrapper.FixedDimensionEmbeddings", MissingKeyEmbeddings
        )

        # Act / Assert
        with pytest.raises(ConfigurationError) as exc_info:
            build_embedding_client(LLMSettings(google_api_key=None))

        assert exc_info.value.details == {"setting": API_KEY_SETTING}
        assert exc_info.value.hint == API_KEY_HINT
        assert isinstance(exc_info.value.__cause__, ValueError)
