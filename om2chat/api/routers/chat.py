"""Chat API endpoints.

Routes:
- POST /chat/{document_id} - Ask a question about a document (RAG)
- GET /chat/{document_id}?limit=N - Read the document's chat history (latest N)

Dependencies: om2chat.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from om2chat.api.deps import get_chat_service, get_document_service
from om2chat.application.services.chat_service import ChatService
from om2chat.application.services.document_service import DocumentService
from om2chat.api.routers.router_utils import QUESTION_BODY_OPENAPI, read_question
from om2chat.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/{document_id}",
    response_model=ChatResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=QUESTION_BODY_OPENAPI,
)
async def chat(
    document_id: str,
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question grounded in one document.

    The body is parsed here rather than through a pydantic parameter so
    that malformed JSON and a bad ``question`` both surface as 400 with
    an ``error`` field.

    Args:
        document_id: Document UUID
        request: Raw request carrying ``{"question": str}``
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Generated answer

    Raises:
        InvalidInputError (400): Unparseable body or missing/blank question
        DocumentNotFoundError (404): Unknown document
        EmbeddingFailure / SearchFailure / CompletionFailure (500)
    """
    question = await read_question(request)
    result = await chat_service.answer_question(document_id, question)

    logger.info(
        f"{__name__}:chat - document_id={document_id} answered, persisted={result.persisted}"
    )
    return ChatResponse(answer=result.answer)


@router.get("/{document_id}", response_model=ChatHistoryResponse, responses=ERROR_RESPONSES)
async def chat_history(
    document_id: str,
    limit: int | None = Query(default=None, ge=1, description="Only the most recent N messages"),
    document_service: DocumentService = Depends(get_document_service),
) -> ChatHistoryResponse:
    """Return a document's chat history, oldest first."""
    messages = await document_service.get_chat_history(document_id, limit=limit)
    return ChatHistoryResponse(
        messages=[ChatMessageResponse(**message) for message in messages],
        total=len(messages),
    )
