"""
Document ORM model.

Represents a broker-uploaded document whose text has been chunked and embedded.

Dependencies: sqlalchemy, om2chat.boundary.db.base
System role: Document metadata persistence
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from om2chat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document metadata row.

    Metadata (title, url) may be edited; content is immutable once chunked.
    Deleting a document removes its chunks, chat history and share links.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Human-readable title shown to clients and used in prompts
        url: Source URL of the uploaded file
        broker_id: Owning broker reference (nullable)
        created_at: Upload timestamp (UTC)
        updated_at: Last metadata edit (UTC)

    Relationships:
        chunks: Embedded text chunks (cascade delete)
        chat_messages: Chat history (cascade delete)
        public_links: Client share links (cascade delete)
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        default="",
        doc="Source URL of the uploaded file",
    )

    broker_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
        doc="Owning broker",
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    chat_messages = relationship(
        "ChatMessageModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    public_links = relationship(
        "PublicLinkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
