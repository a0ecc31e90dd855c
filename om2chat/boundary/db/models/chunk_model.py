"""
Document chunk ORM model.

A unit of document text with its pgvector embedding.

Dependencies: sqlalchemy, pgvector, om2chat.boundary.db.base, om2chat.configs
System role: Vector storage for similarity search
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from om2chat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from om2chat.configs import get_settings


class ChunkModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Embedded text chunk belonging to exactly one document.

    The embedding dimension comes from LLMSettings.embedding_dimension and
    must match the configured embedding model.

    Constraints:
        document_id: Foreign key ON DELETE CASCADE to documents.id
    """

    __tablename__ = "document_chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    embedding = mapped_column(
        Vector(get_settings().llm.embedding_dimension),
        nullable=False,
    )

    chunk_metadata: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    document = relationship("DocumentModel", back_populates="chunks")
