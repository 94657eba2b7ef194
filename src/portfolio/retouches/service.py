from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.ids import new_id
from portfolio.commons.logging import logger
from portfolio.commons.schemas import page_offset
from portfolio.media.repository import MediaRepository
from portfolio.retouches.exceptions import (
    RETOUCHE_NOT_FOUND,
    UNKNOWN_IMAGES,
    RetouchesServiceNotFoundException,
    RetouchesServiceUnprocessableException,
)
from portfolio.retouches.models import Retouche
from portfolio.retouches.repository import RetouchesRepository
from portfolio.retouches.schemas import CreateRetoucheRequest, RetoucheUpdate
from portfolio.retouches.views import RetoucheView
from portfolio.seo.schemas import SEOInput
from portfolio.seo.service import seo_values


@dataclass(frozen=True)
class RetouchesService:
    repo: RetouchesRepository
    media_repo: MediaRepository

    @classmethod
    def create(cls) -> "RetouchesService":
        return cls(repo=RetouchesRepository(), media_repo=MediaRepository())

    def view(self, retouche: Retouche) -> RetoucheView:
        return RetoucheView(retouche, repo=self.repo, media_repo=self.media_repo)

    async def _check_media_exist(
        self, session: AsyncSession, image_ids: list[UUID], seo: SEOInput | None
    ) -> None:
        wanted = set(image_ids)
        if seo is not None and seo.og_image_id is not None:
            wanted.add(seo.og_image_id)
        if not wanted:
            return
        found = await self.media_repo.find_by_ids(session, list(wanted))
        if len(found) != len(wanted):
            raise RetouchesServiceUnprocessableException(
                "Before or after image does not exist", UNKNOWN_IMAGES
            )

    async def list_retouches(
        self, session: AsyncSession, *, status: str | None, page: int, limit: int
    ) -> tuple[list[RetoucheView], int]:
        rows = await self.repo.find_all(
            session, status=status, limit=limit, offset=page_offset(page, limit)
        )
        total = await self.repo.count(session, status=status)
        return [self.view(r) for r in rows], total

    async def get_retouche(self, session: AsyncSession, *, retouche_id: UUID) -> RetoucheView:
        r = await self.repo.find_by_id(session, retouche_id)
        if r is None:
            raise RetouchesServiceNotFoundException("Retouche not found", RETOUCHE_NOT_FOUND)
        return self.view(r)

    async def create_retouche(
        self, session: AsyncSession, *, req: CreateRetoucheRequest
    ) -> RetoucheView:
        await self._check_media_exist(
            session, [req.before_image_id, req.after_image_id], req.seo
        )
        r = Retouche(
            id=new_id(),
            title=req.title.strip(),
            before_image_id=req.before_image_id,
            after_image_id=req.after_image_id,
            status=req.status,
            **seo_values(req.seo),
        )
        await self.repo.create(session, r)
        await session.commit()
        logger.info("Retouche created: %s", r.id)
        return self.view(r)

    async def update_retouche(
        self, session: AsyncSession, *, retouche_id: UUID, changes: RetoucheUpdate
    ) -> RetoucheView:
        view = await self.get_retouche(session, retouche_id=retouche_id)
        image_ids = [
            i for i in (changes.before_image_id, changes.after_image_id) if i is not None
        ]
        await self._check_media_exist(
            session, image_ids, changes.seo if "seo" in changes.model_fields_set else None
        )
        await view.update(session, changes)
        await session.commit()
        return view

    async def delete_retouche(self, session: AsyncSession, *, retouche_id: UUID) -> None:
        deleted = await self.repo.delete(session, retouche_id)
        if not deleted:
            raise RetouchesServiceNotFoundException("Retouche not found", RETOUCHE_NOT_FOUND)
        await session.commit()
        logger.info("Retouche deleted: %s", retouche_id)
