"""
Document CRUD operations.

Provides document metadata queries, broker filtering, and cascading delete.

Dependencies: sqlalchemy, om2chat.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.models import (
    ChatMessageModel,
    ChunkModel,
    DocumentModel,
    PublicLinkModel,
)
from om2chat.boundary.db.CRUD.base_crud import BaseCRUD
from om2chat.boundary.db.CRUD.chat_message_crud import chat_message_crud
from om2chat.boundary.db.CRUD.chunk_crud import chunk_crud
from om2chat.boundary.db.CRUD.public_link_crud import public_link_crud


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_broker_id(
        self,
        session: AsyncSession,
        broker_id: UUID | None = None,
    ) -> Sequence[DocumentModel]:
        """
        List documents newest first, optionally restricted to one broker.

        Args:
            session: Async database session
            broker_id: Owning broker UUID (None lists every document)

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = select(DocumentModel).order_by(DocumentModel.created_at.desc())
        if broker_id is not None:
            stmt = stmt.where(DocumentModel.broker_id == broker_id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_with_related(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> dict[str, int] | None:
        """
        Delete a document together with its chat history, chunks and share links.

        Related rows are removed explicitly so the result does not depend on
        the backend enforcing ON DELETE CASCADE.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            Deleted row counts per table, or None if the document does not exist
        """
        if not await self.get_by_id(session, id):
            return None

        deleted = {
            "chat_messages": await chat_message_crud.delete_where(
                session, ChatMessageModel.document_id == id
            ),
            "chunks": await chunk_crud.delete_where(session, ChunkModel.document_id == id),
            "public_links": await public_link_crud.delete_where(
                session, PublicLinkModel.document_id == id
            ),
        }
        await self.delete_by_id(session, id)
        return deleted


document_crud = DocumentCRUD()
