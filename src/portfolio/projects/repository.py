from __future__ import annotations

from typing import Any
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.relations import dump_id_list
from portfolio.commons.repository import EntityRepository
from portfolio.core.db import storage_errors
from portfolio.projects.models import Project
from portfolio.projects.schemas import ProjectUpdate
from portfolio.seo.service import seo_values


class ProjectsRepository(EntityRepository[Project, ProjectUpdate]):
    model = Project

    def to_values(self, changes: ProjectUpdate) -> dict[str, Any]:
        values: dict[str, Any] = {}
        fields = changes.model_fields_set
        if "title" in fields:
            values["title"] = changes.title or ""
        if "description" in fields:
            values["description"] = changes.description
        if "status" in fields and changes.status is not None:
            values["status"] = changes.status
        if "is_draft" in fields and changes.is_draft is not None:
            values["is_draft"] = changes.is_draft
        if "images" in fields:
            values["images"] = dump_id_list(changes.images or [])
        if "seo" in fields:
            values.update(seo_values(changes.seo))
        return values

    async def count_referencing_media(self, session: AsyncSession, *, media_id: UUID) -> int:
        stmt = (
            sa.select(sa.func.count())
            .select_from(Project)
            .where(
                sa.or_(
                    Project.images.contains(str(media_id)),
                    Project.seo_og_image_id == media_id,
                )
            )
        )
        with storage_errors():
            res = await session.execute(stmt)
        return int(res.scalar_one())
