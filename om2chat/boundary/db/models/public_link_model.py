"""
Public link ORM model.

A shareable token through which a broker's clients chat with one document
without signing in.

Dependencies: sqlalchemy, om2chat.boundary.db.base
System role: Public share link persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from om2chat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class PublicLinkModel(Base, UUIDMixin, TimestampMixin):
    """
    Share link for one document.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Shared document (cascade delete)
        broker_id: Broker who created the link
        title: Title shown to clients
        description: Optional text shown to clients
        public_token: Unguessable token used in the public URL (unique)
        is_active: Inactive links resolve like unknown tokens
    """

    __tablename__ = "public_links"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    broker_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    public_token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    document = relationship("DocumentModel", back_populates="public_links")
