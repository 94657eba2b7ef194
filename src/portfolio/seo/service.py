from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.logging import logger
from portfolio.commons.relations import EntityLookup, resolve_optional
from portfolio.commons.sqltypes import utcnow
from portfolio.media.models import Media
from portfolio.media.schemas import MediaPublic
from portfolio.seo.models import SEOColumnsMixin
from portfolio.seo.repository import SEOSettingsRepository
from portfolio.seo.schemas import (
    SEOCheck,
    SEOInput,
    SEOPublic,
    SEOSettingsPublic,
    SEOSettingsUpdate,
    SEOStatusResponse,
)

@dataclass
class SEOData:
    title: str | None = None
    description: str | None = None
    keywords: list[str] = field(default_factory=list)
    og_image: Media | None = None

    def to_public(self) -> SEOPublic:
        return SEOPublic(
            title=self.title,
            description=self.description,
            keywords=list(self.keywords),
            og_image=MediaPublic.model_validate(self.og_image) if self.og_image else None,
        )


def parse_keywords(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    return [str(k) for k in data]


def seo_values(seo: SEOInput | None) -> dict[str, Any]:
    """Column values for the embedded SEO sub-record (replaces it as a whole)."""
    seo = seo or SEOInput()
    return {
        "seo_title": seo.title or None,
        "seo_description": seo.description or None,
        "seo_keywords": json.dumps(seo.keywords) if seo.keywords else None,
        "seo_og_image_id": seo.og_image_id,
    }


async def resolve_seo(
    session: AsyncSession, media_repo: EntityLookup[Media], row: SEOColumnsMixin
) -> SEOData:
    # Absent or dangling og image both read as "no image".
    og_image = await resolve_optional(session, media_repo, row.seo_og_image_id)
    return SEOData(
        title=row.seo_title,
        description=row.seo_description,
        keywords=parse_keywords(row.seo_keywords),
        og_image=og_image,
    )


DEFAULT_SEO_SETTINGS: dict[str, Any] = {
    "site_name": "Valentine Arnaly Photography",
    "author_name": "Valentine Arnaly",
    "contact_email": "",
    "location": "Tarbes, France",
    "robots_mode": "allow_all",
    "google_verification": "",
    "facebook_verification": "",
    "pinterest_verification": "",
    "bing_verification": "",
    "default_language": "fr",
    "copyright_text": "",
}

ROBOTS_MODE_DESCRIPTIONS = {
    "allow_all": "Search engines can crawl and index the whole site",
    "protect_admin": "Search engines can crawl the site except the admin area",
    "block_all": "Search engines are asked not to crawl the site (maintenance)",
}


def robots_description(mode: str) -> str:
    return ROBOTS_MODE_DESCRIPTIONS.get(mode, "Unknown mode")


def seo_status(settings: SEOSettingsPublic) -> SEOStatusResponse:
    visible = settings.robots_mode != "block_all"
    has_identity = bool(settings.author_name and settings.location)
    checks = [
        SEOCheck(
            name="Site visible",
            status="good" if visible else "warning",
            description="The site is visible to search engines"
            if visible
            else "The site is in maintenance mode",
        ),
        SEOCheck(
            name="Basic information",
            status="good" if has_identity else "warning",
            description="Author and location are set"
            if has_identity
            else "Author or location is missing",
        ),
        SEOCheck(
            name="Contact email",
            status="good" if settings.contact_email else "missing",
            description="Contact email is set"
            if settings.contact_email
            else "Contact email is missing",
        ),
        SEOCheck(
            name="Google verification",
            status="good" if settings.google_verification else "missing",
            description="Site verified with Google"
            if settings.google_verification
            else "Google verification is missing",
        ),
    ]
    good = sum(1 for c in checks if c.status == "good")
    overall = "good" if good >= 3 else "warning" if good >= 2 else "error"
    return SEOStatusResponse(
        overall=overall,
        checks=checks,
        robots_mode=settings.robots_mode,
        robots_description=robots_description(settings.robots_mode),
    )


@dataclass(frozen=True)
class SEOSettingsService:
    repo: SEOSettingsRepository

    @classmethod
    def create(cls) -> "SEOSettingsService":
        return cls(repo=SEOSettingsRepository())

    async def get_settings(self, session: AsyncSession) -> SEOSettingsPublic:
        row = await self.repo.get(session)
        if row is None:
            # Nothing saved yet; the defaults are written on first update.
            return SEOSettingsPublic(**DEFAULT_SEO_SETTINGS)
        return SEOSettingsPublic.model_validate(row)

    async def update_settings(
        self, session: AsyncSession, *, changes: SEOSettingsUpdate
    ) -> SEOSettingsPublic:
        values = changes.model_dump(exclude_unset=True, exclude_none=True)
        row = await self.repo.save(
            session, values=values, defaults=DEFAULT_SEO_SETTINGS, now=utcnow()
        )
        await session.commit()
        logger.info("SEO settings updated: %s", ", ".join(sorted(values)) or "-")
        return SEOSettingsPublic.model_validate(row)

    async def set_robots_mode(self, session: AsyncSession, *, mode: str) -> SEOSettingsPublic:
        return await self.update_settings(
            session, changes=SEOSettingsUpdate(robots_mode=mode)  # type: ignore[arg-type]
        )

    async def get_status(self, session: AsyncSession) -> SEOStatusResponse:
        return seo_status(await self.get_settings(session))
