"""
Integration tests for DocumentStore.

Tests the gateway used by services: document metadata lookup with
malformed IDs, chat history round trips, listing with chunk counts,
delete, ping, and mapping of similarity search rows to RetrievedChunk.

System role: Verification of the datastore gateway
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from om2chat.boundary.db.document_store import DocumentStore, parse_document_id
from om2chat.boundary.db.models import MessageRole
from om2chat.models.chunk import RetrievedChunk


class TestParseDocumentId:
    """Test suite for parse_document_id()."""

    def test_should_accept_uuid_and_string(self) -> None:
        """Test UUIDs and their string form parse."""
        value = uuid.uuid4()
        assert parse_document_id(value) is value
        assert parse_document_id(str(value)) == value

    @pytest.mark.parametrize("value", ["not-a-uuid", "", None, 123])
    def test_should_return_none_for_invalid_values(self, value) -> None:
        """Test malformed IDs parse to None."""
        assert parse_document_id(value) is None


class TestDocumentStoreMetadata:
    """Test suite for document metadata operations."""

    @pytest.mark.asyncio
    async def test_insert_and_fetch_document(self, document_store: DocumentStore) -> None:
        """Test a stored document is found by its string ID."""
        # Arrange
        created = await document_store.insert_document_metadata(
            "Policy Terms", "https://files.example.com/policy.pdf"
        )

        # Act
        found = await document_store.fetch_document_metadata(str(created.id))

        # Assert
        assert found is not None
        assert found.title == "Policy Terms"
        assert found.url == "https://files.example.com/policy.pdf"

    @pytest.mark.asyncio
    async def test_fetch_should_return_none_for_malformed_id(
        self, document_store: DocumentStore
    ) -> None:
        """Test malformed IDs are treated as missing documents."""
        assert await document_store.fetch_document_metadata("../../etc/passwd") is None

    @pytest.mark.asyncio
    async def test_fetch_should_return_none_for_unknown_id(
        self, document_store: DocumentStore
    ) -> None:
        """Test unknown IDs are missing documents."""
        assert await document_store.fetch_document_metadata(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_list_documents_with_counts(
        self, document_store: DocumentStore, broker_id: uuid.UUID, vector_factory
    ) -> None:
        """Test listing by broker and counting chunks."""
        # Arrange
        document = await document_store.insert_document_metadata("Mine", "", broker_id)
        await document_store.insert_document_metadata("Other", "", uuid.uuid4())
        await document_store.insert_document_chunks(
            document.id, [("text", vector_factory(0), {"chunk_index": 0})]
        )

        # Act
        documents = await document_store.list_documents(broker_id)
        counts = await document_store.count_chunks([d.id for d in documents])

        # Assert
        assert [d.title for d in documents] == ["Mine"]
        assert counts == {document.id: 1}

    @pytest.mark.asyncio
    async def test_delete_document_should_report_counts(
        self, document_store: DocumentStore, vector_factory
    ) -> None:
        """Test delete removes chunks and chat history."""
        # Arrange
        document = await document_store.insert_document_metadata("Doomed", "")
        doc_id = document.id
        await document_store.insert_document_chunks(doc_id, [("text", vector_factory(0), {})])
        await document_store.insert_chat_message(doc_id, MessageRole.USER, "q")

        # Act
        deleted = await document_store.delete_document(doc_id)
        await document_store.commit()

        # Assert
        assert deleted == {"chat_messages": 1, "chunks": 1, "public_links": 0}
        assert await document_store.fetch_chat_history(doc_id) == []
        assert await document_store.fetch_document_metadata(doc_id) is None


class TestDocumentStoreChatHistory:
    """Test suite for chat history operations."""

    @pytest.mark.asyncio
    async def test_history_round_trip(self, document_store: DocumentStore) -> None:
        """Test committed exchange reads back oldest first."""
        # Arrange
        document = await document_store.insert_document_metadata("Chat", "")
        await document_store.insert_chat_message(document.id, MessageRole.USER, "Hi")
        await document_store.insert_chat_message(document.id, "assistant", "Hello")
        await document_store.commit()

        # Act
        history = await document_store.fetch_chat_history(document.id)

        # Assert
        assert [(m.role, m.content) for m in history] == [
            (MessageRole.USER, "Hi"),
            (MessageRole.ASSISTANT, "Hello"),
        ]

    @pytest.mark.asyncio
    async def test_rollback_should_discard_uncommitted_messages(
        self, document_store: DocumentStore
    ) -> None:
        """Test rollback() drops flushed but uncommitted rows."""
        # Arrange
        document = await document_store.insert_document_metadata("Chat", "")
        doc_id = document.id
        await document_store.commit()
        await document_store.insert_chat_message(doc_id, MessageRole.USER, "lost")

        # Act
        await document_store.rollback()

        # Assert
        assert await document_store.fetch_chat_history(doc_id) == []


class TestDocumentStoreSimilaritySearch:
    """Test suite for vector_similarity_search()."""

    @pytest.mark.asyncio
    async def test_should_convert_distance_to_similarity(self, document_id: uuid.UUID) -> None:
        """Test rows become RetrievedChunk with similarity = 1 - distance."""
        # Arrange
        chunk = MagicMock(
            id=uuid.uuid4(),
            document_id=document_id,
            content="Interest accrues at 3% annually",
            chunk_index=2,
        )
        store = DocumentStore(AsyncMock())

        with patch("om2chat.boundary.db.document_store.chunk_crud") as mock_crud:
            mock_crud.similarity_search = AsyncMock(return_value=[(chunk, 0.25)])

            # Act
            results = await store.vector_similarity_search(document_id, [0.1, 0.2], k=5)

        # Assert
        assert results == [
            RetrievedChunk(
                chunk_id=chunk.id,
                document_id=document_id,
                content="Interest accrues at 3% annually",
                chunk_index=2,
                similarity_score=0.75,
            )
        ]
        mock_crud.similarity_search.assert_awaited_once_with(
            store.db, document_id, [0.1, 0.2], 5
        )


class TestDocumentStorePing:
    """Test suite for ping()."""

    @pytest.mark.asyncio
    async def test_ping_should_succeed_on_live_database(
        self, document_store: DocumentStore
    ) -> None:
        """Test SELECT 1 round trip."""
        assert await document_store.ping() is True
