"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients are built
once and cached; stores and services are request-scoped.

Dependencies: om2chat.configs, om2chat.application, om2chat.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.application.chunker import SentenceChunker
from om2chat.application.services import ChatService, DocumentService, PublicLinkService
from om2chat.boundary.db import DocumentStore, get_async_db
from om2chat.boundary.llm import CompletionClient, EmbeddingClient
from om2chat.configs import Settings, get_settings


class ServiceCache:
    """Container for cached provider clients."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._embedding_client: EmbeddingClient | None = None
        self._completion_client: CompletionClient | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_client(self) -> EmbeddingClient:
        """Get cached embedding client (raises ConfigurationError without an API key)."""
        if self._embedding_client is None:
            self._embedding_client = EmbeddingClient.from_settings(self.settings.llm)
        return self._embedding_client

    @property
    def completion_client(self) -> CompletionClient:
        """Get cached completion client (raises ConfigurationError without an API key)."""
        if self._completion_client is None:
            self._completion_client = CompletionClient.from_settings(self.settings.llm)
        return self._completion_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_client = None
        self._completion_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_store(db: AsyncSession = Depends(get_async_db)) -> DocumentStore:
    """
    Get request-scoped document store.

    Args:
        db: Async database session (injected via Depends)
    """
    return DocumentStore(db)


def get_chat_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service with cached provider clients.

    Raises:
        ConfigurationError: If OPENAI_API_KEY is missing
    """
    cache = get_service_cache()
    return ChatService(
        store=store,
        embedding_client=cache.embedding_client,
        completion_client=cache.completion_client,
        retrieval_settings=settings.retrieval,
    )


def get_document_service(store: DocumentStore = Depends(get_document_store)) -> DocumentService:
    """Get document service for listing, lookup and deletion."""
    return DocumentService(store=store)


def get_ingestion_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service able to ingest (chunk and embed) text.

    Raises:
        ConfigurationError: If OPENAI_API_KEY is missing
    """
    return DocumentService(
        store=store,
        embedding_client=get_service_cache().embedding_client,
        chunker=SentenceChunker(settings.ingestion.max_chunk_size),
        source=settings.ingestion.source,
    )


def get_public_link_service(
    store: DocumentStore = Depends(get_document_store),
) -> PublicLinkService:
    """Get share link service (no provider clients needed)."""
    return PublicLinkService(store=store)
