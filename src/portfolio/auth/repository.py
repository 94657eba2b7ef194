from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.models import Session
from portfolio.commons.repository import EntityRepository
from portfolio.core.db import storage_errors


class SessionUpdate(BaseModel):
    expires_at: dt.datetime | None = None


class SessionsRepository(EntityRepository[Session, SessionUpdate]):
    model = Session
    touch_updated_at = False

    async def find_by_token(self, session: AsyncSession, *, token: str) -> Session | None:
        # Returns expired rows too; expiry is judged by the caller's clock.
        stmt = sa.select(Session).where(Session.token == token)
        with storage_errors():
            res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def list_active_for_user(
        self, session: AsyncSession, *, user_id: UUID, now: dt.datetime
    ) -> list[Session]:
        stmt = (
            sa.select(Session)
            .where(Session.user_id == user_id)
            .where(Session.kind == "authenticated")
            .where(Session.expires_at > now)
            .order_by(Session.created_at.desc())
        )
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())

    async def extend_expiry(
        self, session: AsyncSession, *, record: Session, expires_at: dt.datetime
    ) -> Session:
        # Monotonic: a racing renewal can never shorten a session.
        stmt = (
            sa.update(Session)
            .where(Session.id == record.id)
            .where(Session.expires_at < expires_at)
            .values(expires_at=expires_at)
            .execution_options(synchronize_session="fetch")
        )
        with storage_errors():
            await session.execute(stmt)
        await self.flush(session)
        with storage_errors():
            await session.refresh(record)
        return record

    async def delete_by_token(self, session: AsyncSession, *, token: str) -> bool:
        stmt = sa.delete(Session).where(Session.token == token)
        with storage_errors():
            res = await session.execute(stmt)
        await self.flush(session)
        return bool(res.rowcount)

    async def delete_all_for_user(self, session: AsyncSession, *, user_id: UUID) -> int:
        stmt = sa.delete(Session).where(Session.user_id == user_id)
        with storage_errors():
            res = await session.execute(stmt)
        await self.flush(session)
        return int(res.rowcount or 0)

    async def delete_expired(self, session: AsyncSession, *, now: dt.datetime) -> int:
        stmt = sa.delete(Session).where(Session.expires_at <= now)
        with storage_errors():
            res = await session.execute(stmt)
        await self.flush(session)
        return int(res.rowcount or 0)
