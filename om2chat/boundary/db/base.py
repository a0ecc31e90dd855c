"""
Declarative base and column mixins for the om2chat tables.

Documents carry created/updated timestamps (title and url may be edited);
chunks and chat messages are append-only and only record creation time.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for every om2chat table (see create_tables)."""


class UUIDMixin:
    """Client-generated UUID4 primary key, stored as native PostgreSQL UUID."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class CreatedAtMixin:
    """
    Creation time in UTC, set on insert and never changed.

    Chat history is read back in created_at order.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )


class TimestampMixin(CreatedAtMixin):
    """Creation time plus last-modified time, refreshed on every UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
