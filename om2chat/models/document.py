"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class IngestDocumentRequest(BaseModel):
    """Request schema for creating a document from extracted text."""

    title: str = Field(min_length=1, description="Document title")
    url: str = Field(default="", description="Source file URL")
    text: str = Field(description="Extracted document text")
    broker_id: uuid.UUID | None = Field(default=None, description="Owning broker")


class IngestDocumentResponse(BaseModel):
    """Result of document ingestion."""

    document_id: uuid.UUID
    chunks: int
    message: str


class DocumentResponse(BaseModel):
    """Document metadata with its chunk count."""

    id: uuid.UUID
    title: str
    url: str
    broker_id: uuid.UUID | None = None
    created_at: datetime
    chunks: int = 0


class DocumentListResponse(BaseModel):
    """Document list response."""

    success: bool = True
    documents: list[DocumentResponse]


class DeleteDocumentResponse(BaseModel):
    """Result of a document delete."""

    success: bool = True
    document_id: uuid.UUID
    deleted_chunks: int = 0
    deleted_messages: int = 0
    deleted_links: int = 0
