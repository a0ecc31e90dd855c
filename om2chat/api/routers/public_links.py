"""Public share link endpoints.

Routes:
- POST /public-links - Broker shares a document, returns the link with its token
- GET /public-links?broker_id= - A broker's links, newest first
- GET /public-links/{token} - Client resolves an active link
- PATCH /public-links/{link_id} - Broker edits or deactivates a link
- DELETE /public-links/{link_id} - Broker removes a link
- POST /public-links/{token}/chat - Client asks a question through the link

Dependencies: om2chat.application.services.public_link_service, chat_service
System role: Share link HTTP API
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, Request, status

from om2chat.api.deps import get_chat_service, get_public_link_service
from om2chat.api.routers.router_utils import QUESTION_BODY_OPENAPI, read_question
from om2chat.application.services.chat_service import ChatService, validate_question
from om2chat.application.services.public_link_service import PublicLinkService
from om2chat.models.chat import ChatResponse, ErrorResponse
from om2chat.models.public_link import (
    CreatePublicLinkRequest,
    DeletePublicLinkResponse,
    PublicLinkListResponse,
    PublicLinkResponse,
    UpdatePublicLinkRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public-links", tags=["public-links"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=PublicLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_public_link(
    request: CreatePublicLinkRequest,
    public_link_service: PublicLinkService = Depends(get_public_link_service),
) -> PublicLinkResponse:
    """Share a document with clients through a new token."""
    return await public_link_service.create_link(
        document_id=request.document_id,
        broker_id=request.broker_id,
        title=request.title,
        description=request.description,
    )


@router.get("", response_model=PublicLinkListResponse, responses={400: {"model": ErrorResponse}})
async def list_public_links(
    broker_id: uuid.UUID = Query(..., description="Broker whose links are listed"),
    public_link_service: PublicLinkService = Depends(get_public_link_service),
) -> PublicLinkListResponse:
    links = await public_link_service.list_links(broker_id)
    return PublicLinkListResponse(links=links)


@router.get("/{token}", response_model=PublicLinkResponse, responses={404: {"model": ErrorResponse}})
async def get_public_link(
    token: str,
    public_link_service: PublicLinkService = Depends(get_public_link_service),
) -> PublicLinkResponse:
    """Active link for a token; unknown and deactivated tokens are both 404."""
    return await public_link_service.get_active_link(token)


@router.patch("/{link_id}", response_model=PublicLinkResponse, responses=ERROR_RESPONSES)
async def update_public_link(
    link_id: str,
    request: UpdatePublicLinkRequest,
    public_link_service: PublicLinkService = Depends(get_public_link_service),
) -> PublicLinkResponse:
    return await public_link_service.update_link(link_id, **request.model_dump(exclude_unset=True))


@router.delete(
    "/{link_id}", response_model=DeletePublicLinkResponse, responses={404: {"model": ErrorResponse}}
)
async def delete_public_link(
    link_id: str,
    public_link_service: PublicLinkService = Depends(get_public_link_service),
) -> DeletePublicLinkResponse:
    return await public_link_service.delete_link(link_id)


@router.post(
    "/{token}/chat",
    response_model=ChatResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=QUESTION_BODY_OPENAPI,
)
async def public_chat(
    token: str,
    request: Request,
    public_link_service: PublicLinkService = Depends(get_public_link_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a client's question about the document behind a share link.

    Raises:
        InvalidInputError (400): Unparseable body or missing/blank question
        PublicLinkNotFoundError (404): Unknown or inactive token
        EmbeddingFailure / SearchFailure / CompletionFailure (500)
    """
    question = validate_question(await read_question(request))
    document_id = await public_link_service.resolve_document_id(token)
    result = await chat_service.answer_question(document_id, question)

    logger.info(
        f"{__name__}:public_chat - document_id={document_id} answered, persisted={result.persisted}"
    )
    return ChatResponse(answer=result.answer)
