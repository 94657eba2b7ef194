from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.ids import new_id
from portfolio.commons.logging import logger
from portfolio.commons.relations import dump_id_list
from portfolio.commons.schemas import page_offset
from portfolio.media.repository import MediaRepository
from portfolio.projects.exceptions import (
    PROJECT_NOT_FOUND,
    UNKNOWN_IMAGES,
    ProjectsServiceNotFoundException,
    ProjectsServiceUnprocessableException,
)
from portfolio.projects.models import Project
from portfolio.projects.repository import ProjectsRepository
from portfolio.projects.schemas import CreateProjectRequest, ProjectUpdate
from portfolio.projects.views import ProjectView
from portfolio.seo.schemas import SEOInput
from portfolio.seo.service import seo_values


@dataclass(frozen=True)
class ProjectsService:
    repo: ProjectsRepository
    media_repo: MediaRepository

    @classmethod
    def create(cls) -> "ProjectsService":
        return cls(repo=ProjectsRepository(), media_repo=MediaRepository())

    def view(self, project: Project) -> ProjectView:
        return ProjectView(project, repo=self.repo, media_repo=self.media_repo)

    async def _check_media_exist(
        self, session: AsyncSession, image_ids: Sequence[UUID], seo: SEOInput | None
    ) -> None:
        wanted = set(image_ids)
        if seo is not None and seo.og_image_id is not None:
            wanted.add(seo.og_image_id)
        if not wanted:
            return
        found = await self.media_repo.find_by_ids(session, list(wanted))
        if len(found) != len(wanted):
            raise ProjectsServiceUnprocessableException(
                "Some images do not exist", UNKNOWN_IMAGES
            )

    async def list_projects(
        self,
        session: AsyncSession,
        *,
        status: str | None,
        page: int,
        limit: int,
        published_only: bool = False,
    ) -> tuple[list[ProjectView], int]:
        # Drafts never leave the admin side.
        is_draft = False if published_only else None
        rows = await self.repo.find_all(
            session,
            status=status,
            is_draft=is_draft,
            limit=limit,
            offset=page_offset(page, limit),
        )
        total = await self.repo.count(session, status=status, is_draft=is_draft)
        return [self.view(p) for p in rows], total

    async def get_project(self, session: AsyncSession, *, project_id: UUID) -> ProjectView:
        p = await self.repo.find_by_id(session, project_id)
        if p is None:
            raise ProjectsServiceNotFoundException("Project not found", PROJECT_NOT_FOUND)
        return self.view(p)

    async def create_project(
        self, session: AsyncSession, *, req: CreateProjectRequest
    ) -> ProjectView:
        await self._check_media_exist(session, req.images, req.seo)
        p = Project(
            id=new_id(),
            title=req.title,
            description=req.description,
            status=req.status,
            is_draft=req.is_draft,
            images=dump_id_list(req.images),
            **seo_values(req.seo),
        )
        await self.repo.create(session, p)
        await session.commit()
        logger.info("Project created: %s", p.id)
        return self.view(p)

    async def update_project(
        self, session: AsyncSession, *, project_id: UUID, changes: ProjectUpdate
    ) -> ProjectView:
        view = await self.get_project(session, project_id=project_id)
        fields = changes.model_fields_set
        await self._check_media_exist(
            session,
            (changes.images or []) if "images" in fields else [],
            changes.seo if "seo" in fields else None,
        )
        await view.update(session, changes)
        await session.commit()
        return view

    async def delete_project(self, session: AsyncSession, *, project_id: UUID) -> None:
        deleted = await self.repo.delete(session, project_id)
        if not deleted:
            raise ProjectsServiceNotFoundException("Project not found", PROJECT_NOT_FOUND)
        await session.commit()
        logger.info("Project deleted: %s", project_id)
