"""
Document service.

Document listing, lookup, deletion, and ingestion of extracted text
(chunk → embed → store).

Dependencies: om2chat.boundary, om2chat.application.chunker
System role: Document management business logic
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from om2chat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from om2chat.application.chunker import SentenceChunker
from om2chat.boundary.db.document_store import DocumentStore
from om2chat.boundary.db.models import DocumentModel
from om2chat.boundary.llm.embedding_client import EmbeddingClient
from om2chat.core.exceptions import (
    DocumentNotFoundError,
    IngestionError,
    InvalidInputError,
)
from om2chat.models.document import DeleteDocumentResponse, DocumentResponse

logger = logging.getLogger(__name__)


def _to_response(document: DocumentModel, chunk_count: int) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        title=document.title,
        url=document.url,
        broker_id=document.broker_id,
        created_at=document.created_at,
        chunks=chunk_count,
    )


@dataclass
class IngestionResult:
    """Outcome of ingesting one document."""

    document_id: uuid.UUID
    chunk_count: int


class DocumentService:
    """Document management and ingestion."""

    def __init__(
        self,
        store: DocumentStore,
        embedding_client: EmbeddingClient | None = None,
        chunker: SentenceChunker | None = None,
        source: str = "pdf",
    ) -> None:
        """
        Args:
            store: Document store gateway (request-scoped)
            embedding_client: Needed for ingestion only
            chunker: Text chunker (default 1000-character chunks)
            source: Source tag written to chunk metadata
        """
        self.store = store
        self.embedding_client = embedding_client
        self.chunker = chunker or SentenceChunker()
        self.source = source

    async def list_documents(self, broker_id: uuid.UUID | None = None) -> list[DocumentResponse]:
        """Documents newest first, each with its chunk count."""
        documents = await self.store.list_documents(broker_id)
        counts = await self.store.count_chunks([doc.id for doc in documents])
        return [
            _to_response(doc, counts.get(doc.id, 0))
            for doc in documents
        ]

    async def get_document(self, document_id: Any) -> DocumentResponse:
        """
        Document metadata with chunk count.

        Raises:
            DocumentNotFoundError: Unknown document
        """
        document = await self.store.fetch_document_metadata(document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        counts = await self.store.count_chunks([document.id])
        return _to_response(document, counts.get(document.id, 0))

    async def delete_document(self, document_id: Any) -> DeleteDocumentResponse:
        """
        Delete a document with its chunks, chat history and share links.

        Returns:
            DeleteDocumentResponse: Deleted document ID and row counts

        Raises:
            DocumentNotFoundError: Unknown document
        """
        document = await self.store.fetch_document_metadata(document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))

        deleted = await self.store.delete_document(document.id)
        await self.store.commit()
        logger.info(
            f"{__name__}:delete_document - document_id={document.id} deleted={deleted}"
        )
        deleted = deleted or {}
        return DeleteDocumentResponse(
            document_id=document.id,
            deleted_chunks=deleted.get("chunks", 0),
            deleted_messages=deleted.get("chat_messages", 0),
            deleted_links=deleted.get("public_links", 0),
        )

    async def get_chat_history(self, document_id: Any, limit: int | None = None) -> list[dict]:
        """
        Chat history for a document, oldest first.

        Args:
            document_id: Document UUID (or its string form)
            limit: Keep only the most recent N messages (None = all)

        Raises:
            DocumentNotFoundError: Unknown document
        """
        document = await self.store.fetch_document_metadata(document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        chat_adapter = ChatHistoryAdapter(document_id=document.id, store=self.store)
        return await chat_adapter.get_messages_as_dicts(limit)

    async def ingest_document(
        self,
        title: str,
        text: str,
        url: str = "",
        broker_id: uuid.UUID | None = None,
    ) -> IngestionResult:
        """
        Create a document from extracted text.

        Flow:
        1. Chunk text
        2. Embed all chunks in one call
        3. Insert document metadata and chunks, then commit

        Any failure rolls the whole document back.

        Raises:
            InvalidInputError: Text yields no chunks
            EmbeddingFailure: Chunk embedding failed
            IngestionError: Storing the document failed
        """
        if self.embedding_client is None:
            raise IngestionError("Ingestion requires an embedding client")

        chunks = self.chunker.chunk_text(text or "")
        if not chunks:
            raise InvalidInputError("Document text is empty", field="text")
        logger.info(f"{__name__}:ingest_document - title={title!r}, chunks={len(chunks)}")

        vectors = await self.embedding_client.embed_documents(chunks)

        try:
            document = await self.store.insert_document_metadata(title, url, broker_id)
            rows = [
                (
                    content,
                    vector,
                    {"document_id": str(document.id), "chunk_index": index, "source": self.source},
                )
                for index, (content, vector) in enumerate(zip(chunks, vectors))
            ]
            count = await self.store.insert_document_chunks(document.id, rows)
            await self.store.commit()
        except Exception as e:
            await self.store.rollback()
            raise IngestionError(
                f"Failed to store document: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info(f"{__name__}:ingest_document - document_id={document.id} stored {count} chunks")
        return IngestionResult(document_id=document.id, chunk_count=count)
