from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.repository import EntityRepository
from portfolio.core.db import storage_errors
from portfolio.media.models import Media
from portfolio.media.schemas import MediaUpdate


class MediaRepository(EntityRepository[Media, MediaUpdate]):
    model = Media
    touch_updated_at = False

    def to_values(self, changes: MediaUpdate) -> dict[str, Any]:
        values = changes.model_dump(exclude_unset=True)
        # filename and url are required columns; null means "leave as is".
        for column in ("filename", "url"):
            if values.get(column) is None:
                values.pop(column, None)
        return values

    async def find_by_ids(
        self, session: AsyncSession, entity_ids: Sequence[UUID]
    ) -> list[Media]:
        if not entity_ids:
            return []
        stmt = sa.select(Media).where(Media.id.in_(list(entity_ids)))
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())
