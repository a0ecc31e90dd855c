"""
Public link CRUD operations.

Token lookup (active links only by default) and per-broker listing.

Dependencies: sqlalchemy, om2chat.boundary.db.models
System role: Share link persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.models import PublicLinkModel
from om2chat.boundary.db.CRUD.base_crud import BaseCRUD


class PublicLinkCRUD(BaseCRUD[PublicLinkModel]):
    """CRUD operations for PublicLinkModel."""

    def __init__(self) -> None:
        super().__init__(PublicLinkModel)

    async def get_by_token(
        self,
        session: AsyncSession,
        token: str,
        active_only: bool = True,
    ) -> PublicLinkModel | None:
        """
        Find a link by its public token.

        Args:
            session: Async database session
            token: Token from the public URL
            active_only: Treat deactivated links as missing

        Returns:
            PublicLinkModel or None
        """
        stmt = select(PublicLinkModel).where(PublicLinkModel.public_token == token)
        if active_only:
            stmt = stmt.where(PublicLinkModel.is_active.is_(True))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_broker_id(
        self,
        session: AsyncSession,
        broker_id: UUID,
    ) -> Sequence[PublicLinkModel]:
        """A broker's links, newest first, active or not."""
        result = await session.execute(
            select(PublicLinkModel)
            .where(PublicLinkModel.broker_id == broker_id)
            .order_by(PublicLinkModel.created_at.desc())
        )
        return result.scalars().all()


public_link_crud = PublicLinkCRUD()
