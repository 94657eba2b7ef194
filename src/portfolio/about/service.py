from __future__ import annotations

import json
import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.about.models import AboutClient, AboutContact
from portfolio.about.repository import AboutRepository
from portfolio.about.schemas import (
    DEFAULT_EXERGUE,
    AboutPublic,
    AboutReplaceRequest,
    ClientPublic,
    ContactPublic,
    TextSection,
)
from portfolio.commons.ids import new_id
from portfolio.commons.logging import logger
from portfolio.commons.sqltypes import utcnow

_PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")


def detect_contact_type(value: str) -> str:
    v = value.strip().lower()
    if "@" in v or v.startswith("mailto:"):
        return "email"
    if "instagram.com" in v or "ig.me" in v:
        return "instagram"
    if "facebook.com" in v or "fb.me" in v:
        return "facebook"
    if "twitter.com" in v or "x.com" in v:
        return "twitter"
    if "linkedin.com" in v:
        return "linkedin"
    if v and _PHONE_RE.match(v):
        return "phone"
    return "website"


def parse_sections(raw: str | None) -> list[TextSection]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    sections: list[TextSection] = []
    for item in data:
        if isinstance(item, dict) and item.get("title"):
            sections.append(
                TextSection(title=str(item["title"]), content=str(item.get("content") or ""))
            )
    return sections


@dataclass(frozen=True)
class AboutService:
    repo: AboutRepository

    @classmethod
    def create(cls) -> "AboutService":
        return cls(repo=AboutRepository())

    async def get_about(self, session: AsyncSession, *, public: bool = False) -> AboutPublic:
        page = await self.repo.get_page(session)
        clients = await self.repo.list_clients(session)
        contacts = await self.repo.list_contacts(session, visible_only=public)
        sections = parse_sections(page.sections if page else None)
        if public:
            sections = [s for s in sections if s.content]
        return AboutPublic(
            exergue=(page.exergue if page else "") or DEFAULT_EXERGUE,
            sections=sections,
            clients=[ClientPublic.model_validate(c) for c in clients],
            contacts=[ContactPublic.model_validate(c) for c in contacts],
            updated_at=page.updated_at if page else None,
        )

    async def replace_about(
        self, session: AsyncSession, *, req: AboutReplaceRequest
    ) -> AboutPublic:
        now = utcnow()
        clients = [
            AboutClient(
                id=new_id(),
                name=c.name,
                logo_url=c.logo_url or None,
                website_url=c.website_url or None,
                order_index=i,
                created_at=now,
            )
            for i, c in enumerate(req.clients)
        ]
        contacts = [
            AboutContact(
                id=new_id(),
                type=c.type or detect_contact_type(c.value),
                label=c.label,
                value=c.value,
                is_visible=c.is_visible,
                order_index=i,
                created_at=now,
            )
            for i, c in enumerate(req.contacts)
        ]
        try:
            await self.repo.save_page(
                session,
                exergue=req.exergue,
                sections=json.dumps([s.model_dump() for s in req.sections]),
                now=now,
            )
            await self.repo.replace_clients(session, clients)
            await self.repo.replace_contacts(session, contacts)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info(
            "About page replaced (%d client(s), %d contact(s))", len(clients), len(contacts)
        )
        return await self.get_about(session)
