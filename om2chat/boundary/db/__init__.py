"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, CreatedAtMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(),
    dispose_engine(): Async connection management
  - DocumentModel, ChunkModel, ChatMessageModel, MessageRole,
    PublicLinkModel: Domain entities
  - DocumentStore: Gateway used by services

Dependencies: sqlalchemy, pgvector, om2chat.configs
System role: Database adapter for documents, chunks and chat history
"""

from om2chat.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from om2chat.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from om2chat.boundary.db.models import (
    ChatMessageModel,
    ChunkModel,
    DocumentModel,
    MessageRole,
    PublicLinkModel,
)
from om2chat.boundary.db.document_store import DocumentStore

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "ChunkModel",
    "ChatMessageModel",
    "MessageRole",
    "PublicLinkModel",
    "DocumentStore",
]
