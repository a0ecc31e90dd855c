"""
Public link schemas.

Request/response schemas for broker share links and client access.

Dependencies: pydantic
System role: Share link API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreatePublicLinkRequest(BaseModel):
    """Request schema for sharing a document with clients."""

    document_id: uuid.UUID
    broker_id: uuid.UUID
    title: str = Field(min_length=1, description="Title shown to clients")
    description: str | None = None


class UpdatePublicLinkRequest(BaseModel):
    """Fields a broker may change on an existing link; omitted fields stay as they are."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_active: bool | None = None


class PublicLinkResponse(BaseModel):
    """Share link as returned to brokers and clients."""

    id: uuid.UUID
    document_id: uuid.UUID
    broker_id: uuid.UUID
    title: str
    description: str | None = None
    public_token: str
    is_active: bool
    created_at: datetime
    document_title: str | None = Field(
        default=None, description="Title of the shared document (token lookups only)"
    )


class PublicLinkListResponse(BaseModel):
    success: bool = True
    links: list[PublicLinkResponse]


class DeletePublicLinkResponse(BaseModel):
    success: bool = True
    link_id: uuid.UUID
