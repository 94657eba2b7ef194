from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.logging import logger
from portfolio.commons.sqltypes import utcnow
from portfolio.legal.exceptions import LEGAL_PAGE_NOT_FOUND, LegalServiceNotFoundException
from portfolio.legal.models import LegalPage
from portfolio.legal.repository import LegalPagesRepository
from portfolio.legal.schemas import LegalPageUpsert


@dataclass(frozen=True)
class LegalService:
    repo: LegalPagesRepository

    @classmethod
    def create(cls) -> "LegalService":
        return cls(repo=LegalPagesRepository())

    async def list_pages(
        self, session: AsyncSession, *, published_only: bool = False
    ) -> list[LegalPage]:
        return await self.repo.find_all(session, published_only=published_only)

    async def get_page(
        self, session: AsyncSession, *, page_type: str, published_only: bool = False
    ) -> LegalPage:
        page = await self.repo.find_by_type(session, page_type=page_type)
        if page is None or (published_only and not page.is_published):
            raise LegalServiceNotFoundException("Legal page not found", LEGAL_PAGE_NOT_FOUND)
        return page

    async def upsert_page(
        self, session: AsyncSession, *, page_type: str, req: LegalPageUpsert
    ) -> LegalPage:
        page = await self.repo.find_by_type(session, page_type=page_type)
        if page is None:
            page = LegalPage(type=page_type, is_published=True)
        page.title = req.title
        page.content = req.content
        if req.is_published is not None:
            page.is_published = req.is_published
        page.updated_at = utcnow()
        await self.repo.save(session, page)
        await session.commit()
        logger.info("Legal page saved: %s", page_type)
        return page
