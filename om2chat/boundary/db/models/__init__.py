"""
Database models package.

Exports:
  - DocumentModel: Document metadata
  - ChunkModel: Embedded document chunk
  - ChatMessageModel, MessageRole: Chat history rows and role enum
  - PublicLinkModel: Client share links

Dependencies: sqlalchemy, pgvector, om2chat.boundary.db.base
System role: Database model definitions for domain entities
"""

from om2chat.boundary.db.models.document_model import DocumentModel
from om2chat.boundary.db.models.chunk_model import ChunkModel
from om2chat.boundary.db.models.chat_message_model import ChatMessageModel, MessageRole
from om2chat.boundary.db.models.public_link_model import PublicLinkModel

__all__ = [
    "DocumentModel",
    "ChunkModel",
    "ChatMessageModel",
    "MessageRole",
    "PublicLinkModel",
]
