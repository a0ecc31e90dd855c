"""
Retrieval logic with document filtering.

Handles nearest-neighbour retrieval for a single document and enforces
that no chunk from another document ever reaches the prompt.

Dependencies: om2chat.boundary.db, om2chat.core.exceptions
System role: RAG retrieval business logic
"""

import logging
import uuid
from typing import Protocol

from om2chat.core.exceptions import SearchFailure
from om2chat.models.chunk import RetrievedChunk

logger = logging.getLogger(__name__)


class SimilaritySearchGateway(Protocol):
    """Datastore capability the retriever depends on."""

    async def vector_similarity_search(
        self,
        document_id: uuid.UUID,
        vector: list[float],
        k: int = 5,
    ) -> list[RetrievedChunk]: ...


class Retriever:
    """Retrieval business logic."""

    def __init__(self, store: SimilaritySearchGateway, top_k: int = 5) -> None:
        """
        Initialize retriever with a similarity search gateway.

        Args:
            store: Gateway running the vector query
            top_k: Default number of chunks to retrieve
        """
        self._store = store
        self.top_k = top_k

    async def retrieve(
        self,
        document_id: uuid.UUID,
        query_embedding: list[float],
        k: int | None = None,
    ) -> list[RetrievedChunk]:
        """
        Retrieve the chunks of one document nearest to the query.

        Args:
            document_id: Document to search within
            query_embedding: Query embedding vector
            k: Number of chunks (defaults to top_k)

        Returns:
            list[RetrievedChunk]: Nearest first, all owned by document_id

        Raises:
            SearchFailure: If the datastore query fails
        """
        k = k or self.top_k
        try:
            results = await self._store.vector_similarity_search(document_id, query_embedding, k)
        except Exception as e:
            raise SearchFailure(
                str(e) or type(e).__name__,
                document_id=str(document_id),
                details={"error_type": type(e).__name__, "k": k},
            ) from e

        return self.rank_results(self.apply_filters(document_id, results or []))[:k]

    def apply_filters(
        self,
        document_id: uuid.UUID,
        results: list[RetrievedChunk],
    ) -> list[RetrievedChunk]:
        """
        Drop any chunk that does not belong to the requested document.

        Args:
            document_id: Requested document
            results: Raw search results

        Returns:
            list[RetrievedChunk]: Results owned by document_id
        """
        owned = [chunk for chunk in results if chunk.document_id == document_id]
        if len(owned) != len(results):
            logger.error(
                f"{__name__}:apply_filters - dropped {len(results) - len(owned)} "
                f"chunks not owned by document {document_id}",
                extra={"document_id": str(document_id)},
            )
        return owned

    def rank_results(self, results: list[RetrievedChunk]) -> list[RetrievedChunk]:
        """
        Order results by similarity, highest first.

        The sort is stable, so datastore order is kept for equal scores.

        Args:
            results: Search results

        Returns:
            list[RetrievedChunk]: Ranked results
        """
        return sorted(results, key=lambda chunk: chunk.similarity_score, reverse=True)
