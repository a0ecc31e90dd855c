"""
Test suite for Retriever.

Tests document-scoped retrieval: search delegation, cross-document
filtering, similarity ranking, k truncation and search failures.
Uses a mocked similarity search gateway.

System role: Verification of retrieval business logic
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from om2chat.core.exceptions import SearchFailure
from om2chat.core.retriever import Retriever
from om2chat.models.chunk import RetrievedChunk


def make_chunk(document_id: uuid.UUID, content: str, score: float, index: int = 0) -> RetrievedChunk:
    return RetrievedChunk(
        chunk_id=uuid.uuid4(),
        document_id=document_id,
        content=content,
        chunk_index=index,
        similarity_score=score,
    )


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Provide mock similarity search gateway."""
    gateway = AsyncMock()
    gateway.vector_similarity_search = AsyncMock(return_value=[])
    return gateway


@pytest.fixture
def retriever(mock_gateway: AsyncMock) -> Retriever:
    """Provide Retriever with default top_k."""
    return Retriever(mock_gateway, top_k=5)


class TestRetrieverRetrieve:
    """Test suite for Retriever.retrieve()."""

    @pytest.mark.asyncio
    async def test_retrieve_should_search_with_document_and_top_k(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test retrieve passes document_id, vector and default k to the gateway."""
        # Arrange
        embedding = [0.1, 0.2, 0.3]

        # Act
        await retriever.retrieve(document_id, embedding)

        # Assert
        mock_gateway.vector_similarity_search.assert_awaited_once_with(document_id, embedding, 5)

    @pytest.mark.asyncio
    async def test_retrieve_should_honour_explicit_k(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test an explicit k overrides top_k."""
        # Act
        await retriever.retrieve(document_id, [0.1], k=2)

        # Assert
        assert mock_gateway.vector_similarity_search.await_args.args[2] == 2

    @pytest.mark.asyncio
    async def test_retrieve_should_return_empty_list_for_document_without_chunks(
        self, retriever: Retriever, document_id: uuid.UUID
    ) -> None:
        """Test a document with no chunks yields no results, not an error."""
        # Act
        results = await retriever.retrieve(document_id, [0.1])

        # Assert
        assert results == []

    @pytest.mark.asyncio
    async def test_retrieve_should_drop_chunks_from_other_documents(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test chunks owned by another document never leave the retriever."""
        # Arrange
        other_document = uuid.uuid4()
        mock_gateway.vector_similarity_search.return_value = [
            make_chunk(other_document, "foreign text", 0.99),
            make_chunk(document_id, "own text", 0.8),
        ]

        # Act
        results = await retriever.retrieve(document_id, [0.1])

        # Assert
        assert [chunk.content for chunk in results] == ["own text"]
        assert all(chunk.document_id == document_id for chunk in results)

    @pytest.mark.asyncio
    async def test_retrieve_should_order_by_similarity_descending(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test scores are non-increasing along the result list."""
        # Arrange
        mock_gateway.vector_similarity_search.return_value = [
            make_chunk(document_id, "b", 0.4),
            make_chunk(document_id, "a", 0.9),
            make_chunk(document_id, "c", 0.1),
        ]

        # Act
        results = await retriever.retrieve(document_id, [0.1])

        # Assert
        scores = [chunk.similarity_score for chunk in results]
        assert scores == sorted(scores, reverse=True)
        assert [chunk.content for chunk in results] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_retrieve_should_keep_store_order_for_equal_scores(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test ties keep the order the datastore returned them in."""
        # Arrange
        mock_gateway.vector_similarity_search.return_value = [
            make_chunk(document_id, "first", 0.5, index=3),
            make_chunk(document_id, "second", 0.5, index=1),
        ]

        # Act
        results = await retriever.retrieve(document_id, [0.1])

        # Assert
        assert [chunk.content for chunk in results] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_retrieve_should_return_at_most_k_chunks(
        self, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test result length never exceeds k even if the store over-returns."""
        # Arrange
        retriever = Retriever(mock_gateway, top_k=2)
        mock_gateway.vector_similarity_search.return_value = [
            make_chunk(document_id, f"chunk {i}", 1.0 - i / 10) for i in range(4)
        ]

        # Act
        results = await retriever.retrieve(document_id, [0.1])

        # Assert
        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_retrieve_should_wrap_store_errors_in_search_failure(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test datastore exceptions surface as SearchFailure with their message."""
        # Arrange
        mock_gateway.vector_similarity_search.side_effect = RuntimeError(
            'relation "document_chunks" does not exist'
        )

        # Act & Assert
        with pytest.raises(SearchFailure) as exc_info:
            await retriever.retrieve(document_id, [0.1])

        assert exc_info.value.message == 'relation "document_chunks" does not exist'
        assert exc_info.value.public_message == (
            'Vector search failed: relation "document_chunks" does not exist'
        )
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_retrieve_should_use_exception_type_when_message_is_empty(
        self, retriever: Retriever, mock_gateway: AsyncMock, document_id: uuid.UUID
    ) -> None:
        """Test a message-less exception still produces a readable failure."""
        # Arrange
        mock_gateway.vector_similarity_search.side_effect = TimeoutError()

        # Act & Assert
        with pytest.raises(SearchFailure) as exc_info:
            await retriever.retrieve(document_id, [0.1])

        assert exc_info.value.message == "TimeoutError"


class TestRetrieverHelpers:
    """Test suite for apply_filters() and rank_results()."""

    def test_apply_filters_should_keep_owned_chunks(
        self, retriever: Retriever, document_id: uuid.UUID
    ) -> None:
        """Test apply_filters returns every owned chunk unchanged."""
        # Arrange
        chunks = [make_chunk(document_id, "x", 0.3), make_chunk(document_id, "y", 0.2)]

        # Act
        filtered = retriever.apply_filters(document_id, chunks)

        # Assert
        assert filtered == chunks

    def test_rank_results_should_not_mutate_input(
        self, retriever: Retriever, document_id: uuid.UUID
    ) -> None:
        """Test rank_results returns a new list."""
        # Arrange
        chunks = [make_chunk(document_id, "low", 0.1), make_chunk(document_id, "high", 0.9)]

        # Act
        ranked = retriever.rank_results(chunks)

        # Assert
        assert [c.content for c in ranked] == ["high", "low"]
        assert [c.content for c in chunks] == ["low", "high"]
