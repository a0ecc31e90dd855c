"""
Test suite for ChatHistoryAdapter business logic layer.

Tests adding messages by role, best-effort exchange persistence with
rollback, and retrieval with optional limits and dict conversion.
Uses a mocked DocumentStore.

System role: Verification of chat history business logic adapter
"""

import logging
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from om2chat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from om2chat.boundary.db.models import MessageRole


@pytest.fixture
def chat_history_adapter(
    document_id: uuid.UUID, mock_document_store: AsyncMock
) -> ChatHistoryAdapter:
    """Provide ChatHistoryAdapter instance for testing."""
    return ChatHistoryAdapter(document_id, mock_document_store)


def make_message(role: MessageRole, content: str, minute: int) -> MagicMock:
    return MagicMock(
        role=role,
        content=content,
        created_at=datetime(2024, 3, 1, 9, minute, tzinfo=timezone.utc),
    )


class TestChatHistoryAdapterInit:
    """Test suite for ChatHistoryAdapter initialization."""

    def test_init_should_store_document_id_and_store(
        self, document_id: uuid.UUID, mock_document_store: AsyncMock
    ) -> None:
        """Test constructor arguments are kept."""
        # Act
        adapter = ChatHistoryAdapter(document_id, mock_document_store)

        # Assert
        assert adapter.document_id == document_id
        assert adapter.store is mock_document_store


class TestChatHistoryAdapterAddMessage:
    """Test suite for add_message() and role helpers."""

    @pytest.mark.asyncio
    async def test_add_user_message_should_insert_user_role(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
        document_id: uuid.UUID,
    ) -> None:
        """Test add_user_message writes a user row for the document."""
        # Act
        await chat_history_adapter.add_user_message("Hello")

        # Assert
        mock_document_store.insert_chat_message.assert_awaited_once_with(
            document_id, MessageRole.USER, "Hello"
        )

    @pytest.mark.asyncio
    async def test_add_assistant_message_should_insert_assistant_role(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
        document_id: uuid.UUID,
    ) -> None:
        """Test add_assistant_message writes an assistant row."""
        # Act
        await chat_history_adapter.add_assistant_message("Hi there")

        # Assert
        mock_document_store.insert_chat_message.assert_awaited_once_with(
            document_id, MessageRole.ASSISTANT, "Hi there"
        )

    @pytest.mark.asyncio
    async def test_add_message_should_pass_string_role_through(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
        document_id: uuid.UUID,
    ) -> None:
        """Test add_message forwards a plain role string to the store."""
        # Act
        await chat_history_adapter.add_message("assistant", "text")

        # Assert
        mock_document_store.insert_chat_message.assert_awaited_once_with(
            document_id, "assistant", "text"
        )


class TestChatHistoryAdapterRecordExchange:
    """Test suite for record_exchange()."""

    @pytest.mark.asyncio
    async def test_should_write_user_then_assistant_and_commit(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test both rows are written in order, then committed."""
        # Act
        persisted = await chat_history_adapter.record_exchange("Question?", "Answer.")

        # Assert
        assert persisted is True
        roles = [c.args[1] for c in mock_document_store.insert_chat_message.await_args_list]
        assert roles == [MessageRole.USER, MessageRole.ASSISTANT]
        mock_document_store.commit.assert_awaited_once()
        mock_document_store.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_return_false_and_roll_back_on_insert_failure(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a failing insert is logged, rolled back and not raised."""
        # Arrange
        mock_document_store.insert_chat_message.side_effect = RuntimeError("connection lost")

        # Act
        with caplog.at_level(logging.ERROR):
            persisted = await chat_history_adapter.record_exchange("Question?", "Answer.")

        # Assert
        assert persisted is False
        mock_document_store.rollback.assert_awaited_once()
        mock_document_store.commit.assert_not_awaited()
        assert "Failed to save chat history" in caplog.text

    @pytest.mark.asyncio
    async def test_should_return_false_on_commit_failure(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test a failing commit is treated like any other write failure."""
        # Arrange
        mock_document_store.commit.side_effect = RuntimeError("serialization failure")

        # Act
        persisted = await chat_history_adapter.record_exchange("Question?", "Answer.")

        # Assert
        assert persisted is False
        mock_document_store.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_should_survive_rollback_failure(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test a rollback error does not escape record_exchange."""
        # Arrange
        mock_document_store.insert_chat_message.side_effect = RuntimeError("boom")
        mock_document_store.rollback.side_effect = RuntimeError("connection closed")

        # Act
        persisted = await chat_history_adapter.record_exchange("Question?", "Answer.")

        # Assert
        assert persisted is False


class TestChatHistoryAdapterGetMessages:
    """Test suite for get_messages() and get_messages_as_dicts()."""

    @pytest.mark.asyncio
    async def test_get_messages_should_return_all_without_limit(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test full history is returned in store order."""
        # Arrange
        history = [make_message(MessageRole.USER, f"m{i}", i) for i in range(4)]
        mock_document_store.fetch_chat_history.return_value = history

        # Act
        messages = await chat_history_adapter.get_messages()

        # Assert
        assert messages == history

    @pytest.mark.asyncio
    async def test_get_messages_should_return_most_recent_with_limit(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test limit keeps the last N messages."""
        # Arrange
        history = [make_message(MessageRole.USER, f"m{i}", i) for i in range(4)]
        mock_document_store.fetch_chat_history.return_value = history

        # Act
        messages = await chat_history_adapter.get_messages(limit=2)

        # Assert
        assert [m.content for m in messages] == ["m2", "m3"]

    @pytest.mark.asyncio
    async def test_get_messages_as_dicts_should_expose_role_values(
        self,
        chat_history_adapter: ChatHistoryAdapter,
        mock_document_store: AsyncMock,
    ) -> None:
        """Test dict conversion uses plain role strings."""
        # Arrange
        mock_document_store.fetch_chat_history.return_value = [
            make_message(MessageRole.USER, "Question?", 0),
            make_message(MessageRole.ASSISTANT, "Answer.", 1),
        ]

        # Act
        messages = await chat_history_adapter.get_messages_as_dicts()

        # Assert
        assert messages == [
            {
                "role": "user",
                "content": "Question?",
                "created_at": datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
            },
            {
                "role": "assistant",
                "content": "Answer.",
                "created_at": datetime(2024, 3, 1, 9, 1, tzinfo=timezone.utc),
            },
        ]

    @pytest.mark.asyncio
    async def test_get_messages_should_handle_empty_history(
        self, chat_history_adapter: ChatHistoryAdapter
    ) -> None:
        """Test a document without chat history yields an empty list."""
        assert await chat_history_adapter.get_messages_as_dicts() == []
