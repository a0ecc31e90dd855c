"""
Chat message CRUD operations.

Document-scoped, append-only chat history.

Dependencies: sqlalchemy, om2chat.boundary.db.models
System role: Chat message persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.models import ChatMessageModel, MessageRole
from om2chat.boundary.db.CRUD.base_crud import BaseCRUD


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        """Initialize ChatMessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def add_message(
        self,
        session: AsyncSession,
        document_id: UUID,
        role: MessageRole | str,
        content: str,
    ) -> ChatMessageModel:
        """
        Append one message to a document's chat history.

        Args:
            session: Async database session
            document_id: Owning document UUID
            role: "user" or "assistant"
            content: Message text

        Returns:
            Created ChatMessageModel

        Raises:
            ValueError: If role is not a known MessageRole
        """
        return await self.create(
            session,
            document_id=document_id,
            role=MessageRole(role),
            content=content,
        )

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChatMessageModel]:
        """
        Fetch a document's chat history, oldest first.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            Messages ordered by created_at, then insertion order
        """
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.document_id == document_id)
            .order_by(ChatMessageModel.created_at.asc(), ChatMessageModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


chat_message_crud = ChatMessageCRUD()
