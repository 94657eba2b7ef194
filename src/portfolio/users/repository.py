from __future__ import annotations

import datetime as dt
from typing import Any
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.models import User
from portfolio.commons.repository import EntityRepository
from portfolio.core.db import storage_errors
from portfolio.users.schemas import UserUpdate


class UsersRepository(EntityRepository[User, UserUpdate]):
    model = User

    def to_values(self, changes: UserUpdate) -> dict[str, Any]:
        values = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in values:
            values["email"] = values["email"].strip().lower()
        if "name" in values:
            values["name"] = values["name"].strip()
        return values

    async def create(self, session: AsyncSession, entity: User) -> User:
        entity.email = entity.email.strip().lower()
        return await super().create(session, entity)

    async def find_by_email(self, session: AsyncSession, *, email: str) -> User | None:
        stmt = sa.select(User).where(sa.func.lower(User.email) == email.strip().lower())
        with storage_errors():
            res = await session.execute(stmt)
            return res.scalar_one_or_none()

    async def touch_last_login(
        self, session: AsyncSession, *, user_id: UUID, now: dt.datetime
    ) -> None:
        user = await self.find_by_id(session, user_id)
        if user is None:
            return
        user.last_login_at = now
        user.updated_at = now
        await self.flush(session)
