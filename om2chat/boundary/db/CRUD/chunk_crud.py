"""
Chunk CRUD operations.

Bulk insertion, chunk counts and pgvector similarity search.

Dependencies: sqlalchemy, pgvector, om2chat.boundary.db.models
System role: Vector persistence and nearest-neighbour queries
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.models import ChunkModel
from om2chat.boundary.db.CRUD.base_crud import BaseCRUD


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def bulk_create(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunks: Sequence[tuple[str, list[float], dict]],
    ) -> int:
        """
        Insert embedded chunks for a document.

        Args:
            session: Async database session
            document_id: Parent document UUID
            chunks: (content, embedding, metadata) tuples in chunk order

        Returns:
            Number of chunks inserted
        """
        session.add_all(
            ChunkModel(
                document_id=document_id,
                content=content,
                chunk_index=index,
                embedding=embedding,
                chunk_metadata=metadata,
            )
            for index, (content, embedding, metadata) in enumerate(chunks)
        )
        await session.flush()
        return len(chunks)

    async def count_by_document_ids(
        self,
        session: AsyncSession,
        document_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """
        Count chunks per document.

        Args:
            session: Async database session
            document_ids: Documents to count for

        Returns:
            Mapping of document UUID to chunk count (0 when absent)
        """
        if not document_ids:
            return {}
        stmt = (
            select(ChunkModel.document_id, func.count(ChunkModel.id))
            .where(ChunkModel.document_id.in_(document_ids))
            .group_by(ChunkModel.document_id)
        )
        result = await session.execute(stmt)
        counts = {doc_id: count for doc_id, count in result.all()}
        return {doc_id: counts.get(doc_id, 0) for doc_id in document_ids}

    @staticmethod
    def build_similarity_query(
        document_id: UUID,
        embedding: list[float],
        k: int,
    ) -> Select:
        """
        Build the nearest-neighbour query for one document.

        The document_id filter is what keeps retrieval scoped to a single
        tenant document.

        Args:
            document_id: Document whose chunks are searched
            embedding: Query vector
            k: Maximum number of rows

        Returns:
            Select yielding (ChunkModel, distance) rows, nearest first
        """
        distance = ChunkModel.embedding.cosine_distance(embedding).label("distance")
        return (
            select(ChunkModel, distance)
            .where(ChunkModel.document_id == document_id)
            .order_by(distance)
            .limit(k)
        )

    async def similarity_search(
        self,
        session: AsyncSession,
        document_id: UUID,
        embedding: list[float],
        k: int = 5,
    ) -> list[tuple[ChunkModel, float]]:
        """
        Return the k chunks of a document nearest to the query vector.

        Args:
            session: Async database session
            document_id: Document whose chunks are searched
            embedding: Query vector
            k: Maximum number of results

        Returns:
            (ChunkModel, cosine distance) pairs, nearest first
        """
        result = await session.execute(self.build_similarity_query(document_id, embedding, k))
        return [(chunk, float(distance)) for chunk, distance in result.all()]


chunk_crud = ChunkCRUD()
