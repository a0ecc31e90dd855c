"""
Shared CRUD operations for the document, chunk and chat message tables.

Dependencies: sqlalchemy
System role: Foundation for model-specific CRUD classes
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from om2chat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Insert, primary-key lookup, update and delete for one model.

    Nothing here commits. Writes are flushed so generated IDs and
    timestamps are visible; DocumentStore.commit() ends the unit of work.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert one row and load its server/default-generated columns.

        Args:
            session: Async database session
            **values: Column values

        Returns:
            The flushed, refreshed instance
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: Any, **values: Any) -> ModelT | None:
        """
        Set columns on one row and reload it.

        Returns:
            The updated instance, or None when no row has this ID
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for column, value in values.items():
            setattr(instance, column, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_where(self, session: AsyncSession, *criteria: ColumnElement[bool]) -> int:
        """
        Bulk-delete rows matching all criteria.

        Returns:
            Number of rows deleted
        """
        result = await session.execute(delete(self.model).where(*criteria))
        return result.rowcount

    async def delete_by_id(self, session: AsyncSession, id: Any) -> bool:
        """Delete one row by primary key; False when it did not exist."""
        return await self.delete_where(session, self.model.id == id) > 0
