"""Application services."""

from om2chat.application.services.chat_service import ChatAnswer, ChatService
from om2chat.application.services.document_service import DocumentService, IngestionResult
from om2chat.application.services.public_link_service import PublicLinkService

__all__ = ["ChatAnswer", "ChatService", "DocumentService", "IngestionResult", "PublicLinkService"]
