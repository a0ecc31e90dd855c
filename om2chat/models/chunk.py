"""
Chunk domain models.

Dependencies: pydantic
System role: Retrieval result contract between datastore and pipeline
"""

import uuid

from pydantic import BaseModel, Field


class RetrievedChunk(BaseModel):
    """A chunk returned by similarity search."""

    chunk_id: uuid.UUID
    document_id: uuid.UUID
    content: str
    chunk_index: int = 0
    similarity_score: float = Field(description="1 - cosine distance; higher is nearer")
