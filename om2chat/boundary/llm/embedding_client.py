"""
Embedding client.

Turns text into fixed-length vectors through the provider's embeddings
endpoint (OpenAI via langchain_openai). One outbound call per invocation,
no retries.

Dependencies: langchain_core, langchain_openai, om2chat.configs
System role: Question and chunk embedding for retrieval
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

from om2chat.boundary.llm.provider_errors import provider_error_message
from om2chat.configs.llm import LLMSettings
from om2chat.core.exceptions import ConfigurationError, EmbeddingFailure

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Embeds questions and document chunks."""

    def __init__(self, embeddings: Embeddings, dimension: int | None = None) -> None:
        """
        Args:
            embeddings: LangChain embeddings implementation
            dimension: Expected vector length (None skips the check)
        """
        self._embeddings = embeddings
        self._dimension = dimension

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "EmbeddingClient":
        """
        Build an OpenAI-backed client.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if not settings.api_key:
            raise ConfigurationError("OPENAI_API_KEY")
        embeddings = OpenAIEmbeddings(
            model=settings.embedding_model,
            api_key=settings.api_key,
            base_url=settings.base_url,
            max_retries=0,
        )
        logger.info(f"{__name__}:from_settings - model={settings.embedding_model}")
        return cls(embeddings, dimension=settings.embedding_dimension)

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a single text (the user's question).

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingFailure: Provider error or unexpected vector length
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise EmbeddingFailure(
                provider_error_message(e),
                details={"error_type": type(e).__name__},
            ) from e

        self._check_dimension(vector)
        return vector

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed document chunks in one batched call.

        Args:
            texts: Chunk texts

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            EmbeddingFailure: Provider error, count mismatch or unexpected vector length
        """
        if not texts:
            return []
        try:
            vectors = await self._embeddings.aembed_documents(texts)
        except Exception as e:
            raise EmbeddingFailure(
                provider_error_message(e),
                details={"error_type": type(e).__name__, "text_count": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingFailure(
                f"Expected {len(texts)} embeddings, got {len(vectors)}",
            )
        for vector in vectors:
            self._check_dimension(vector)
        return vectors

    def _check_dimension(self, vector: list[float]) -> None:
        if not vector:
            raise EmbeddingFailure("Provider returned an empty embedding")
        if self._dimension is not None and len(vector) != self._dimension:
            raise EmbeddingFailure(
                f"Embedding has {len(vector)} dimensions, expected {self._dimension}",
            )
