"""
Generic entity store.

One `EntityRepository` subclass per entity kind. Every method takes the
`AsyncSession` as first argument; the caller owns the transaction and
commits. Absent rows are reported as `None`/`False`, never raised.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.sqltypes import utcnow
from portfolio.core.db import storage_errors

ModelT = TypeVar("ModelT")
UpdateT = TypeVar("UpdateT", bound=BaseModel)


class EntityRepository(Generic[ModelT, UpdateT]):
    model: type[ModelT]
    touch_updated_at: bool = True

    async def flush(self, session: AsyncSession) -> None:
        with storage_errors():
            try:
                await session.flush()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def create(self, session: AsyncSession, entity: ModelT) -> ModelT:
        session.add(entity)
        await self.flush(session)
        return entity

    async def find_by_id(self, session: AsyncSession, entity_id: UUID) -> ModelT | None:
        stmt = sa.select(self.model).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        with storage_errors():
            res = await session.execute(stmt)
        return res.scalar_one_or_none()

    def _where(self, stmt: Any, filters: dict[str, Any]) -> Any:
        for column, value in filters.items():
            if value is None:
                continue
            stmt = stmt.where(getattr(self.model, column) == value)
        return stmt

    async def find_all(
        self,
        session: AsyncSession,
        *,
        limit: int = 50,
        offset: int = 0,
        **filters: Any,
    ) -> list[ModelT]:
        stmt = self._where(sa.select(self.model), filters)
        stmt = (
            stmt.order_by(self.model.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
            .offset(offset)
        )
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())

    async def count(self, session: AsyncSession, **filters: Any) -> int:
        stmt = self._where(sa.select(sa.func.count()).select_from(self.model), filters)
        with storage_errors():
            res = await session.execute(stmt)
        return int(res.scalar_one())

    def to_values(self, changes: UpdateT) -> dict[str, Any]:
        """Map a partial update to column values. Unset fields are omitted."""
        return changes.model_dump(exclude_unset=True)

    async def update(
        self, session: AsyncSession, entity_id: UUID, changes: UpdateT
    ) -> ModelT | None:
        entity = await self.find_by_id(session, entity_id)
        if entity is None:
            return None
        values = self.to_values(changes)
        values.pop("id", None)
        values.pop("created_at", None)
        if self.touch_updated_at:
            values["updated_at"] = utcnow()
        for column, value in values.items():
            setattr(entity, column, value)
        await self.flush(session)
        return entity

    async def delete(self, session: AsyncSession, entity_id: UUID) -> bool:
        stmt = sa.delete(self.model).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        with storage_errors():
            res = await session.execute(stmt)
        await self.flush(session)
        return bool(res.rowcount)
