from __future__ import annotations

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.core.db import storage_errors
from portfolio.legal.models import LegalPage


class LegalPagesRepository:
    async def find_by_type(self, session: AsyncSession, *, page_type: str) -> LegalPage | None:
        with storage_errors():
            return await session.get(LegalPage, page_type)

    async def find_all(
        self, session: AsyncSession, *, published_only: bool = False
    ) -> list[LegalPage]:
        stmt = sa.select(LegalPage).order_by(LegalPage.type.asc())
        if published_only:
            stmt = stmt.where(LegalPage.is_published.is_(True))
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())

    async def save(self, session: AsyncSession, page: LegalPage) -> LegalPage:
        session.add(page)
        with storage_errors():
            try:
                await session.flush()
            except SQLAlchemyError:
                await session.rollback()
                raise
        return page
