"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    question: str = Field(description="User question about the document")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""

    error: str
