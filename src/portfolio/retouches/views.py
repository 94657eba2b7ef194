from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.relations import LazyRelation, resolve_required
from portfolio.media.models import Media
from portfolio.media.repository import MediaRepository
from portfolio.media.schemas import MediaPublic
from portfolio.retouches.exceptions import (
    RETOUCHE_NOT_FOUND,
    RetouchesServiceNotFoundException,
)
from portfolio.retouches.models import Retouche
from portfolio.retouches.repository import RetouchesRepository
from portfolio.retouches.schemas import RetouchePublic, RetoucheUpdate
from portfolio.seo.service import SEOData, resolve_seo


class RetoucheView:
    """
    A retouche row plus its before/after images and SEO.

    Both images are required: a dangling id raises `BrokenReferenceException`
    instead of reading as absent.
    """

    def __init__(
        self,
        retouche: Retouche,
        *,
        repo: RetouchesRepository,
        media_repo: MediaRepository,
    ) -> None:
        self.retouche = retouche
        self._repo = repo
        self._media_repo = media_repo
        self._before: LazyRelation[Media] = LazyRelation(self._load_before)
        self._after: LazyRelation[Media] = LazyRelation(self._load_after)
        self._seo: LazyRelation[SEOData] = LazyRelation(self._load_seo)

    @property
    def id(self) -> UUID:
        return self.retouche.id

    async def _load_before(self, session: AsyncSession) -> Media:
        return await resolve_required(
            session, self._media_repo, self.retouche.before_image_id, relation="before image"
        )

    async def _load_after(self, session: AsyncSession) -> Media:
        return await resolve_required(
            session, self._media_repo, self.retouche.after_image_id, relation="after image"
        )

    async def _load_seo(self, session: AsyncSession) -> SEOData:
        return await resolve_seo(session, self._media_repo, self.retouche)

    async def before_image(self, session: AsyncSession) -> Media:
        return await self._before.get(session)

    async def after_image(self, session: AsyncSession) -> Media:
        return await self._after.get(session)

    async def seo(self, session: AsyncSession) -> SEOData:
        return await self._seo.get(session)

    def set_before_image(self, media: Media) -> None:
        self.retouche.before_image_id = media.id
        self._before.set(media)

    def set_after_image(self, media: Media) -> None:
        self.retouche.after_image_id = media.id
        self._after.set(media)

    async def update(self, session: AsyncSession, changes: RetoucheUpdate) -> None:
        updated = await self._repo.update(session, self.retouche.id, changes)
        if updated is None:
            raise RetouchesServiceNotFoundException("Retouche not found", RETOUCHE_NOT_FOUND)
        self.retouche = updated
        fields = changes.model_fields_set
        if "before_image_id" in fields:
            self._before.invalidate()
        if "after_image_id" in fields:
            self._after.invalidate()
        if "seo" in fields:
            self._seo.invalidate()

    async def to_public(self, session: AsyncSession) -> RetouchePublic:
        r = self.retouche
        before = await self.before_image(session)
        after = await self.after_image(session)
        seo = await self.seo(session)
        return RetouchePublic(
            id=r.id,
            title=r.title,
            before_image=MediaPublic.model_validate(before),
            after_image=MediaPublic.model_validate(after),
            status=r.status,  # type: ignore[arg-type]
            seo=seo.to_public(),
            created_at=r.created_at,
            updated_at=r.updated_at,
        )
