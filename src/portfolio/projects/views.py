from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.relations import (
    LazyRelation,
    dump_id_list,
    parse_id_list,
    resolve_many,
)
from portfolio.media.models import Media
from portfolio.media.repository import MediaRepository
from portfolio.media.schemas import MediaPublic
from portfolio.projects.exceptions import (
    PROJECT_NOT_FOUND,
    ProjectsServiceNotFoundException,
)
from portfolio.projects.models import Project
from portfolio.projects.repository import ProjectsRepository
from portfolio.projects.schemas import ProjectPublic, ProjectUpdate
from portfolio.seo.service import SEOData, resolve_seo


class ProjectView:
    """
    A project row plus its hydrated relations.

    `images()` and `seo()` resolve on first access and are cached on this view.
    Mutations go through `update()` / `set_images()`, which keep the cache and
    the persisted id list in agreement.
    """

    def __init__(
        self,
        project: Project,
        *,
        repo: ProjectsRepository,
        media_repo: MediaRepository,
    ) -> None:
        self.project = project
        self._repo = repo
        self._media_repo = media_repo
        self._images: LazyRelation[list[Media]] = LazyRelation(self._load_images)
        self._seo: LazyRelation[SEOData] = LazyRelation(self._load_seo)

    @property
    def id(self) -> UUID:
        return self.project.id

    @property
    def image_ids(self) -> list[UUID]:
        return parse_id_list(self.project.images)

    async def _load_images(self, session: AsyncSession) -> list[Media]:
        return await resolve_many(session, self._media_repo, self.image_ids)

    async def _load_seo(self, session: AsyncSession) -> SEOData:
        return await resolve_seo(session, self._media_repo, self.project)

    async def images(self, session: AsyncSession) -> list[Media]:
        return await self._images.get(session)

    async def seo(self, session: AsyncSession) -> SEOData:
        return await self._seo.get(session)

    def set_images(self, medias: Sequence[Media]) -> None:
        # Written on the next flush of the owning session.
        self.project.images = dump_id_list(m.id for m in medias)
        self._images.set(list(medias))

    async def update(self, session: AsyncSession, changes: ProjectUpdate) -> None:
        updated = await self._repo.update(session, self.project.id, changes)
        if updated is None:
            raise ProjectsServiceNotFoundException("Project not found", PROJECT_NOT_FOUND)
        self.project = updated
        fields = changes.model_fields_set
        if "images" in fields:
            self._images.invalidate()
        if "seo" in fields:
            self._seo.invalidate()

    async def to_public(self, session: AsyncSession) -> ProjectPublic:
        p = self.project
        images = await self.images(session)
        seo = await self.seo(session)
        return ProjectPublic(
            id=p.id,
            title=p.title,
            description=p.description,
            status=p.status,  # type: ignore[arg-type]
            is_draft=p.is_draft,
            images=[MediaPublic.model_validate(m) for m in images],
            seo=seo.to_public(),
            created_at=p.created_at,
            updated_at=p.updated_at,
        )
