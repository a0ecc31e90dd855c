"""
Document store gateway.

Typed query functions over the datastore used by the chat pipeline and
document management: document metadata, chunk similarity search,
chat history and client share links. Wraps one request-scoped AsyncSession.

Dependencies: sqlalchemy, om2chat.boundary.db.CRUD
System role: Single seam between services and the database
"""

import logging
import uuid
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.CRUD import (
    chat_message_crud,
    chunk_crud,
    document_crud,
    public_link_crud,
)
from om2chat.boundary.db.models import (
    ChatMessageModel,
    DocumentModel,
    MessageRole,
    PublicLinkModel,
)
from om2chat.models.chunk import RetrievedChunk

logger = logging.getLogger(__name__)


def parse_document_id(document_id: Any) -> uuid.UUID | None:
    """Coerce a path/body value into a UUID, None when it is not one."""
    if isinstance(document_id, uuid.UUID):
        return document_id
    try:
        return uuid.UUID(str(document_id))
    except (TypeError, ValueError):
        return None


class DocumentStore:
    """
    Gateway over the document, chunk and chat history tables.

    Write methods flush only; commit() / rollback() close the unit of work.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def fetch_document_metadata(self, document_id: Any) -> DocumentModel | None:
        """
        Fetch document metadata.

        Args:
            document_id: Document UUID (or its string form)

        Returns:
            DocumentModel, or None when absent or not a valid UUID
        """
        doc_uuid = parse_document_id(document_id)
        if doc_uuid is None:
            return None
        return await document_crud.get_by_id(self.db, doc_uuid)

    async def vector_similarity_search(
        self,
        document_id: uuid.UUID,
        vector: list[float],
        k: int = 5,
    ) -> list[RetrievedChunk]:
        """
        Nearest-neighbour search restricted to one document.

        Args:
            document_id: Document whose chunks are searched
            vector: Query embedding
            k: Maximum number of chunks

        Returns:
            Chunks nearest first, with similarity = 1 - cosine distance
        """
        rows = await chunk_crud.similarity_search(self.db, document_id, vector, k)
        return [
            RetrievedChunk(
                chunk_id=chunk.id,
                document_id=chunk.document_id,
                content=chunk.content,
                chunk_index=chunk.chunk_index,
                similarity_score=1.0 - distance,
            )
            for chunk, distance in rows
        ]

    async def insert_chat_message(
        self,
        document_id: uuid.UUID,
        role: MessageRole | str,
        content: str,
    ) -> ChatMessageModel:
        """Append one chat message to a document's history."""
        return await chat_message_crud.add_message(self.db, document_id, role, content)

    async def fetch_chat_history(self, document_id: uuid.UUID) -> Sequence[ChatMessageModel]:
        """Chat history for a document, oldest first."""
        return await chat_message_crud.get_by_document_id(self.db, document_id)

    async def insert_document_metadata(
        self,
        title: str,
        url: str,
        broker_id: uuid.UUID | None = None,
    ) -> DocumentModel:
        """Create a document row."""
        return await document_crud.create(self.db, title=title, url=url, broker_id=broker_id)

    async def insert_document_chunks(
        self,
        document_id: uuid.UUID,
        chunks: Sequence[tuple[str, list[float], dict]],
    ) -> int:
        """Insert (content, embedding, metadata) chunks in order."""
        return await chunk_crud.bulk_create(self.db, document_id, chunks)

    async def list_documents(self, broker_id: uuid.UUID | None = None) -> Sequence[DocumentModel]:
        """Documents newest first, optionally for one broker."""
        return await document_crud.get_by_broker_id(self.db, broker_id)

    async def count_chunks(self, document_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, int]:
        """Chunk count per document."""
        return await chunk_crud.count_by_document_ids(self.db, document_ids)

    async def delete_document(self, document_id: uuid.UUID) -> dict[str, int] | None:
        """Delete a document with its chunks and chat history."""
        return await document_crud.delete_with_related(self.db, document_id)

    async def insert_public_link(
        self,
        document_id: uuid.UUID,
        broker_id: uuid.UUID,
        title: str,
        public_token: str,
        description: str | None = None,
    ) -> PublicLinkModel:
        """Create an active share link for a document."""
        return await public_link_crud.create(
            self.db,
            document_id=document_id,
            broker_id=broker_id,
            title=title,
            description=description,
            public_token=public_token,
            is_active=True,
        )

    async def fetch_public_link_by_token(self, token: str) -> PublicLinkModel | None:
        """Active share link for a token, None when unknown or deactivated."""
        return await public_link_crud.get_by_token(self.db, token)

    async def list_public_links(self, broker_id: uuid.UUID) -> Sequence[PublicLinkModel]:
        """A broker's share links, newest first."""
        return await public_link_crud.get_by_broker_id(self.db, broker_id)

    async def update_public_link(self, link_id: Any, **values: Any) -> PublicLinkModel | None:
        """Change title, description or is_active; None when the link does not exist."""
        link_uuid = parse_document_id(link_id)
        if link_uuid is None:
            return None
        return await public_link_crud.update_by_id(self.db, link_uuid, **values)

    async def delete_public_link(self, link_id: Any) -> bool:
        """Delete a share link; False when it does not exist."""
        link_uuid = parse_document_id(link_id)
        if link_uuid is None:
            return False
        return await public_link_crud.delete_by_id(self.db, link_uuid)

    async def ping(self) -> bool:
        """Round-trip a trivial query; True when the database answers."""
        result = await self.db.execute(text("SELECT 1"))
        return result.scalar() == 1

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
