from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.core.db import storage_errors
from portfolio.seo.models import SEO_SETTINGS_ID, SEOSettings


class SEOSettingsRepository:
    async def get(self, session: AsyncSession) -> SEOSettings | None:
        with storage_errors():
            return await session.get(SEOSettings, SEO_SETTINGS_ID)

    async def save(
        self,
        session: AsyncSession,
        *,
        values: dict[str, Any],
        defaults: dict[str, Any],
        now: dt.datetime,
    ) -> SEOSettings:
        row = await self.get(session)
        if row is None:
            row = SEOSettings(id=SEO_SETTINGS_ID, **defaults)
            session.add(row)
        for column, value in values.items():
            setattr(row, column, value)
        row.updated_at = now
        with storage_errors():
            try:
                await session.flush()
            except SQLAlchemyError:
                await session.rollback()
                raise
        return row
