"""Document API endpoints.

Routes:
- GET /documents - List documents (optionally for one broker) with chunk counts
- POST /documents - Ingest extracted text as a new document
- GET /documents/{document_id} - Document metadata
- DELETE /documents/{document_id} - Delete document, chunks and chat history

Dependencies: om2chat.application.services.document_service
System role: Document management HTTP API
"""

import uuid

from fastapi import APIRouter, Depends, status

from om2chat.api.deps import get_document_service, get_ingestion_service
from om2chat.application.services.document_service import DocumentService
from om2chat.models.chat import ErrorResponse
from om2chat.models.document import (
    DeleteDocumentResponse,
    DocumentListResponse,
    DocumentResponse,
    IngestDocumentRequest,
    IngestDocumentResponse,
)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    broker_id: uuid.UUID | None = None,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List documents newest first."""
    documents = await document_service.list_documents(broker_id)
    return DocumentListResponse(documents=documents)


@router.post(
    "",
    response_model=IngestDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ingest_document(
    request: IngestDocumentRequest,
    document_service: DocumentService = Depends(get_ingestion_service),
) -> IngestDocumentResponse:
    """Chunk, embed and store a document's extracted text."""
    result = await document_service.ingest_document(
        title=request.title,
        text=request.text,
        url=request.url,
        broker_id=request.broker_id,
    )
    return IngestDocumentResponse(
        document_id=result.document_id,
        chunks=result.chunk_count,
        message=f"Successfully processed {result.chunk_count} text chunks",
    )


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Document metadata with chunk count."""
    return await document_service.get_document(document_id)


@router.delete(
    "/{document_id}",
    response_model=DeleteDocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DeleteDocumentResponse:
    """Delete a document and everything attached to it."""
    return await document_service.delete_document(document_id)
