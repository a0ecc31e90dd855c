"""
Public link service.

Brokers share a document with their clients through an unguessable token;
clients use the token to read the link and to chat with the document.

Dependencies: om2chat.boundary.db.document_store
System role: Share link business logic
"""

import logging
import secrets
import uuid
from typing import Any

from om2chat.boundary.db.document_store import DocumentStore, parse_document_id
from om2chat.boundary.db.models import PublicLinkModel
from om2chat.core.exceptions import DocumentNotFoundError, PublicLinkNotFoundError
from om2chat.models.public_link import DeletePublicLinkResponse, PublicLinkResponse

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "doc_"
UPDATABLE_FIELDS = ("title", "description", "is_active")


def new_public_token() -> str:
    """URL-safe random token, e.g. ``doc_Xo3k...``."""
    return f"{TOKEN_PREFIX}{secrets.token_urlsafe(24)}"


def _redact(token: str) -> str:
    return f"{token[:8]}..." if len(token) > 8 else token


def _to_response(link: PublicLinkModel, document_title: str | None = None) -> PublicLinkResponse:
    return PublicLinkResponse(
        id=link.id,
        document_id=link.document_id,
        broker_id=link.broker_id,
        title=link.title,
        description=link.description,
        public_token=link.public_token,
        is_active=link.is_active,
        created_at=link.created_at,
        document_title=document_title,
    )


class PublicLinkService:
    """Create, list, resolve, update and delete share links."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def create_link(
        self,
        document_id: uuid.UUID,
        broker_id: uuid.UUID,
        title: str,
        description: str | None = None,
    ) -> PublicLinkResponse:
        """
        Share a document.

        Raises:
            DocumentNotFoundError: Unknown document
        """
        document = await self.store.fetch_document_metadata(document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))

        link = await self.store.insert_public_link(
            document_id=document.id,
            broker_id=broker_id,
            title=title,
            public_token=new_public_token(),
            description=description,
        )
        await self.store.commit()
        logger.info(
            f"{__name__}:create_link - link_id={link.id} document_id={document.id} broker_id={broker_id}"
        )
        return _to_response(link, document.title)

    async def list_links(self, broker_id: uuid.UUID) -> list[PublicLinkResponse]:
        """A broker's links, newest first."""
        links = await self.store.list_public_links(broker_id)
        return [_to_response(link) for link in links]

    async def get_active_link(self, token: str) -> PublicLinkResponse:
        """
        Resolve a token for a client.

        Raises:
            PublicLinkNotFoundError: Unknown or inactive token, or the
                shared document no longer exists
        """
        link = await self.store.fetch_public_link_by_token(token)
        if link is None:
            raise PublicLinkNotFoundError(_redact(token))
        document = await self.store.fetch_document_metadata(link.document_id)
        if document is None:
            raise PublicLinkNotFoundError(_redact(token))
        return _to_response(link, document.title)

    async def resolve_document_id(self, token: str) -> uuid.UUID:
        """Document behind an active token (see get_active_link)."""
        link = await self.get_active_link(token)
        return link.document_id

    async def update_link(self, link_id: Any, **changes: Any) -> PublicLinkResponse:
        """
        Apply broker edits; ``None`` clears the description and is ignored
        for the other fields.

        Raises:
            PublicLinkNotFoundError: Unknown link ID
        """
        values = {
            field: value
            for field, value in changes.items()
            if field in UPDATABLE_FIELDS and (value is not None or field == "description")
        }
        link = await self.store.update_public_link(link_id, **values)
        if link is None:
            raise PublicLinkNotFoundError(str(link_id))
        await self.store.commit()
        logger.info(f"{__name__}:update_link - link_id={link.id} changed={sorted(values)}")
        return _to_response(link)

    async def delete_link(self, link_id: Any) -> DeletePublicLinkResponse:
        """
        Raises:
            PublicLinkNotFoundError: Unknown link ID
        """
        link_uuid = parse_document_id(link_id)
        if link_uuid is None or not await self.store.delete_public_link(link_uuid):
            raise PublicLinkNotFoundError(str(link_id))
        await self.store.commit()
        logger.info(f"{__name__}:delete_link - link_id={link_uuid}")
        return DeletePublicLinkResponse(link_id=link_uuid)
