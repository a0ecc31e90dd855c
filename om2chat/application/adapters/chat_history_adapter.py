"""
Chat history adapter.

High-level business logic for a document's chat history.
Provides simple interface for adding/retrieving messages by role and the
best-effort persistence of a question/answer exchange.

Dependencies: om2chat.boundary.db.document_store, om2chat.observability
System role: Conversation persistence for the chat pipeline
"""

import logging
from typing import List, Sequence
from uuid import UUID

from om2chat.boundary.db.document_store import DocumentStore
from om2chat.boundary.db.models import ChatMessageModel, MessageRole
from om2chat.core.exceptions import PersistenceFailure
from om2chat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ChatHistoryAdapter:
    """
    High-level adapter for chat history operations.

    Provides business logic layer on top of the document store.
    Writes are flushed; record_exchange() commits.
    """

    def __init__(self, document_id: UUID, store: DocumentStore) -> None:
        """
        Initialize chat history adapter.

        Args:
            document_id: Document UUID for chat history scope
            store: Document store gateway
        """
        self.document_id = document_id
        self.store = store

    async def add_message(self, role: MessageRole | str, content: str) -> ChatMessageModel:
        """
        Add message to chat history by role.

        Args:
            role: Message role ("user" or "assistant")
            content: Message content

        Raises:
            ValueError: If role is not "user" or "assistant"
        """
        return await self.store.insert_chat_message(self.document_id, role, content)

    async def add_user_message(self, content: str) -> ChatMessageModel:
        """Add user message to chat history."""
        return await self.add_message(MessageRole.USER, content)

    async def add_assistant_message(self, content: str) -> ChatMessageModel:
        """Add assistant message to chat history."""
        return await self.add_message(MessageRole.ASSISTANT, content)

    async def record_exchange(self, question: str, answer: str) -> bool:
        """
        Persist a question and its answer, user first, in one transaction.

        Failures are rolled back and logged, never raised: delivering the
        answer takes priority over history durability.

        Args:
            question: User's question
            answer: Assistant's answer

        Returns:
            bool: True if both messages were committed
        """
        try:
            await self.add_user_message(question)
            await self.add_assistant_message(answer)
            await self.store.commit()
            return True
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to save chat history",
                PersistenceFailure(str(e) or type(e).__name__),
                document_id=self.document_id,
                cause=type(e).__name__,
            )
            try:
                await self.store.rollback()
            except Exception as rollback_error:
                logger.warning(
                    f"{__name__}:record_exchange - rollback failed: "
                    f"{type(rollback_error).__name__}: {rollback_error}"
                )
            return False

    async def get_messages(self, limit: int | None = None) -> List[ChatMessageModel]:
        """
        Get chat messages for the document, oldest first.

        Args:
            limit: Maximum number of recent messages to return (None = all)

        Returns:
            List of ChatMessageModel rows
        """
        messages: Sequence[ChatMessageModel] = await self.store.fetch_chat_history(self.document_id)
        messages = list(messages)

        if limit is not None and limit > 0:
            # Return most recent N messages
            return messages[-limit:]

        return messages

    async def get_messages_as_dicts(self, limit: int | None = None) -> List[dict]:
        """
        Get chat messages as dictionaries for API responses.

        Args:
            limit: Maximum number of recent messages to return (None = all)

        Returns:
            List of message dicts with keys: role, content, created_at
        """
        messages = await self.get_messages(limit)

        return [
            {
                "role": MessageRole(msg.role).value,
                "content": msg.content,
                "created_at": msg.created_at,
            }
            for msg in messages
        ]
