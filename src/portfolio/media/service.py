from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.ids import new_id
from portfolio.commons.logging import logger
from portfolio.commons.schemas import page_offset
from portfolio.media.exceptions import (
    MEDIA_IN_USE,
    MEDIA_NOT_FOUND,
    MediaInUseException,
    MediaServiceNotFoundException,
)
from portfolio.media.models import Media
from portfolio.media.repository import MediaRepository
from portfolio.media.schemas import CreateMediaRequest, MediaUpdate
from portfolio.projects.repository import ProjectsRepository
from portfolio.retouches.repository import RetouchesRepository


@dataclass(frozen=True)
class MediaService:
    repo: MediaRepository
    projects_repo: ProjectsRepository
    retouches_repo: RetouchesRepository

    @classmethod
    def create(cls) -> "MediaService":
        return cls(
            repo=MediaRepository(),
            projects_repo=ProjectsRepository(),
            retouches_repo=RetouchesRepository(),
        )

    async def list_media(
        self, session: AsyncSession, *, mime_type: str | None, page: int, limit: int
    ) -> tuple[list[Media], int]:
        rows = await self.repo.find_all(
            session, mime_type=mime_type, limit=limit, offset=page_offset(page, limit)
        )
        total = await self.repo.count(session, mime_type=mime_type)
        return rows, total

    async def get_media(self, session: AsyncSession, *, media_id: UUID) -> Media:
        media = await self.repo.find_by_id(session, media_id)
        if media is None:
            raise MediaServiceNotFoundException("Media not found", MEDIA_NOT_FOUND)
        return media

    async def register_media(self, session: AsyncSession, *, req: CreateMediaRequest) -> Media:
        media = Media(id=new_id(), **req.model_dump())
        await self.repo.create(session, media)
        await session.commit()
        logger.info("Media registered: %s (%s)", media.id, media.filename)
        return media

    async def update_media(
        self, session: AsyncSession, *, media_id: UUID, changes: MediaUpdate
    ) -> Media:
        media = await self.repo.update(session, media_id, changes)
        if media is None:
            raise MediaServiceNotFoundException("Media not found", MEDIA_NOT_FOUND)
        await session.commit()
        return media

    async def references(self, session: AsyncSession, *, media_id: UUID) -> int:
        in_projects = await self.projects_repo.count_referencing_media(
            session, media_id=media_id
        )
        in_retouches = await self.retouches_repo.count_referencing_media(
            session, media_id=media_id
        )
        return in_projects + in_retouches

    async def delete_media(self, session: AsyncSession, *, media_id: UUID) -> None:
        await self.get_media(session, media_id=media_id)
        if await self.references(session, media_id=media_id):
            raise MediaInUseException(
                "Media is still used by a project or retouche", MEDIA_IN_USE
            )
        await self.repo.delete(session, media_id)
        await session.commit()
        logger.info("Media deleted: %s", media_id)
