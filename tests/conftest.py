"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, document store, provider client mocks,
sample documents and embedding vectors
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

EMBEDDING_DIM = 1536


def make_vector(hot_index: int = 0, dim: int = EMBEDDING_DIM) -> list[float]:
    """One-hot vector of the configured embedding dimension."""
    vector = [0.0] * dim
    vector[hot_index % dim] = 1.0
    return vector


@pytest.fixture
def vector_factory():
    """Provide make_vector for building embeddings of the right dimension."""
    return make_vector


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from om2chat.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def document_store(test_async_db):
    """DocumentStore bound to the in-memory test session."""
    from om2chat.boundary.db.document_store import DocumentStore

    return DocumentStore(test_async_db)


@pytest.fixture
def document_id() -> uuid.UUID:
    """Generate a test document ID."""
    return uuid.uuid4()


@pytest.fixture
def broker_id() -> uuid.UUID:
    """Generate a test broker ID."""
    return uuid.uuid4()


@pytest.fixture
def sample_document(document_id: uuid.UUID) -> MagicMock:
    """
    Document row stand-in for service tests.

    Returns:
        MagicMock: Object with DocumentModel attributes
    """
    document = MagicMock()
    document.id = document_id
    document.title = "Policy Terms"
    document.url = "https://files.example.com/policy-terms.pdf"
    document.broker_id = None
    document.created_at = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    return document


@pytest.fixture
def mock_document_store(sample_document: MagicMock) -> AsyncMock:
    """
    Create mock DocumentStore for testing.

    Returns:
        AsyncMock: Store that finds sample_document and persists successfully
    """
    store = AsyncMock()
    store.fetch_document_metadata = AsyncMock(return_value=sample_document)
    store.vector_similarity_search = AsyncMock(return_value=[])
    store.insert_chat_message = AsyncMock()
    store.fetch_chat_history = AsyncMock(return_value=[])
    store.count_chunks = AsyncMock(return_value={})
    store.commit = AsyncMock()
    store.rollback = AsyncMock()
    return store


@pytest.fixture
def mock_embedding_client() -> AsyncMock:
    """
    Create mock EmbeddingClient for testing.

    Returns:
        AsyncMock: Client returning a fixed query vector
    """
    client = AsyncMock()
    client.embed_query = AsyncMock(return_value=make_vector(0))
    client.embed_documents = AsyncMock(
        side_effect=lambda texts: [make_vector(i) for i in range(len(texts))]
    )
    return client


@pytest.fixture
def mock_completion_client() -> AsyncMock:
    """
    Create mock CompletionClient for testing.

    Returns:
        AsyncMock: Client returning a fixed answer
    """
    from om2chat.boundary.llm.completion_client import CompletionResult

    client = AsyncMock()
    client.complete = AsyncMock(
        return_value=CompletionResult(
            answer="The policy covers water damage.",
            finish_reason="stop",
            usage={"input_tokens": 120, "output_tokens": 8, "total_tokens": 128},
        )
    )
    return client
