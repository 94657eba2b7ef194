from __future__ import annotations

from typing import Any
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.repository import EntityRepository
from portfolio.core.db import storage_errors
from portfolio.retouches.models import Retouche
from portfolio.retouches.schemas import RetoucheUpdate
from portfolio.seo.service import seo_values


class RetouchesRepository(EntityRepository[Retouche, RetoucheUpdate]):
    model = Retouche

    def to_values(self, changes: RetoucheUpdate) -> dict[str, Any]:
        values = changes.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"seo"}
        )
        if "title" in values:
            values["title"] = values["title"].strip()
        if "seo" in changes.model_fields_set:
            values.update(seo_values(changes.seo))
        return values

    async def count_referencing_media(self, session: AsyncSession, *, media_id: UUID) -> int:
        stmt = (
            sa.select(sa.func.count())
            .select_from(Retouche)
            .where(
                sa.or_(
                    Retouche.before_image_id == media_id,
                    Retouche.after_image_id == media_id,
                    Retouche.seo_og_image_id == media_id,
                )
            )
        )
        with storage_errors():
            res = await session.execute(stmt)
        return int(res.scalar_one())
