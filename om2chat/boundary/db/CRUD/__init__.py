"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from om2chat.boundary.db.CRUD import document_crud, chunk_crud

    document = await document_crud.get_by_id(db, document_id)
"""

from om2chat.boundary.db.CRUD.base_crud import BaseCRUD
from om2chat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from om2chat.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from om2chat.boundary.db.CRUD.chat_message_crud import ChatMessageCRUD, chat_message_crud
from om2chat.boundary.db.CRUD.public_link_crud import PublicLinkCRUD, public_link_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChunkCRUD",
    "chunk_crud",
    "ChatMessageCRUD",
    "chat_message_crud",
    "PublicLinkCRUD",
    "public_link_crud",
]
