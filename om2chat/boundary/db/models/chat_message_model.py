"""
Chat message ORM model.

Append-only chat history scoped to a document.

Dependencies: sqlalchemy, om2chat.boundary.db.base
System role: Chat history persistence
"""

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from om2chat.boundary.db.base import Base, CreatedAtMixin


class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessageModel(Base, CreatedAtMixin):
    """
    One chat turn for one role.

    The integer primary key increases with insertion order and breaks
    created_at ties, so a document's history is totally ordered.
    """

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    document = relationship("DocumentModel", back_populates="chat_messages")
