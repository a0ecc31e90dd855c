"""
Chat service for document Q&A with RAG.

Orchestrates the answer pipeline for one request:
validate → fetch document → embed question → similarity search →
assemble context → generate completion → persist exchange.

Each step's output feeds the next; the first failing step short-circuits
and nothing is retried. Persistence is best-effort and never changes the
outcome once an answer exists.

Dependencies: om2chat.boundary, om2chat.core, om2chat.application.adapters
System role: Chat service orchestration layer
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from om2chat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from om2chat.boundary.db.document_store import DocumentStore
from om2chat.boundary.db.models import DocumentModel
from om2chat.boundary.llm.completion_client import CompletionClient
from om2chat.boundary.llm.embedding_client import EmbeddingClient
from om2chat.configs.retrieval import RetrievalSettings
from om2chat.core.context_builder import assemble_context
from om2chat.core.exceptions import DocumentNotFoundError, InvalidInputError
from om2chat.core.retriever import Retriever
from om2chat.models.chunk import RetrievedChunk
from om2chat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


@dataclass
class ChatAnswer:
    """Outcome of one pipeline run."""

    answer: str
    chunks: list[RetrievedChunk] = field(default_factory=list)
    persisted: bool = False
    finish_reason: str | None = None
    usage: dict[str, Any] = field(default_factory=dict)


def validate_question(question: Any) -> str:
    """
    Check the inbound question.

    Raises:
        InvalidInputError: If question is missing, not a string, or blank
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidInputError("Missing or invalid question", field="question")
    return question


class ChatService:
    """
    Chat service for document Q&A.

    Coordinates document lookup, embedding, retrieval, completion and
    chat history persistence. All collaborators are injected.
    """

    def __init__(
        self,
        store: DocumentStore,
        embedding_client: EmbeddingClient,
        completion_client: CompletionClient,
        retrieval_settings: RetrievalSettings | None = None,
        retriever: Retriever | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Document store gateway (request-scoped)
            embedding_client: Question embedding client
            completion_client: Answer generation client
            retrieval_settings: top_k, context budget and separator
            retriever: Optional retriever override (built from store otherwise)
        """
        self.store = store
        self.embedding_client = embedding_client
        self.completion_client = completion_client
        self.retrieval_settings = retrieval_settings or RetrievalSettings()
        self.retriever = retriever or Retriever(store, top_k=self.retrieval_settings.top_k)

    async def get_document(self, document_id: Any) -> DocumentModel:
        """
        Fetch a document or fail.

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        document = await self.store.fetch_document_metadata(document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    async def answer_question(self, document_id: Any, question: Any) -> ChatAnswer:
        """
        Answer a question about one document.

        Args:
            document_id: Target document (UUID or string)
            question: User's question

        Returns:
            ChatAnswer: Generated answer, retrieved chunks and persistence flag

        Raises:
            InvalidInputError: Blank or non-string question
            DocumentNotFoundError: Unknown document
            EmbeddingFailure: Embedding step failed
            SearchFailure: Similarity search failed
            CompletionFailure: Completion step failed
        """
        question = validate_question(question)

        document = await self.get_document(document_id)
        log_with_context(
            logger, logging.INFO, "answer_question - START",
            document_id=document.id, question_len=len(question),
        )

        embedding = await self.embedding_client.embed_query(question)
        log_with_context(logger, logging.INFO, "answer_question - embedded", embedding=embedding)

        chunks = await self.retriever.retrieve(document.id, embedding)
        context = assemble_context(
            (chunk.content for chunk in chunks),
            separator=self.retrieval_settings.context_separator,
            max_chars=self.retrieval_settings.max_context_chars,
        )
        log_with_context(
            logger, logging.INFO, "answer_question - retrieved",
            chunk_count=len(chunks), context_chars=len(context),
        )

        completion = await self.completion_client.complete(document.title, context, question)
        log_with_context(
            logger, logging.INFO, "answer_question - completed",
            answer_len=len(completion.answer), finish_reason=completion.finish_reason,
            usage=completion.usage,
        )

        chat_adapter = ChatHistoryAdapter(document_id=document.id, store=self.store)
        persisted = await chat_adapter.record_exchange(question, completion.answer)
        if not persisted:
            logger.warning(
                f"{__name__}:answer_question - chat history not saved for document_id={document.id}"
            )

        return ChatAnswer(
            answer=completion.answer,
            chunks=chunks,
            persisted=persisted,
            finish_reason=completion.finish_reason,
            usage=completion.usage,
        )

