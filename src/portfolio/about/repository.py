from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.about.models import ABOUT_PAGE_ID, AboutClient, AboutContact, AboutPage
from portfolio.core.db import storage_errors


class AboutRepository:
    """
    The about page row and its two child collections.

    Nothing here commits: the service owns the transaction so a page and its
    children are replaced together or not at all.
    """

    async def flush(self, session: AsyncSession) -> None:
        with storage_errors():
            try:
                await session.flush()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def get_page(self, session: AsyncSession) -> AboutPage | None:
        with storage_errors():
            return await session.get(AboutPage, ABOUT_PAGE_ID)

    async def list_clients(self, session: AsyncSession) -> list[AboutClient]:
        stmt = sa.select(AboutClient).order_by(AboutClient.order_index.asc())
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())

    async def list_contacts(
        self, session: AsyncSession, *, visible_only: bool = False
    ) -> list[AboutContact]:
        stmt = sa.select(AboutContact).order_by(AboutContact.order_index.asc())
        if visible_only:
            stmt = stmt.where(AboutContact.is_visible.is_(True))
        with storage_errors():
            res = await session.execute(stmt)
        return list(res.scalars().all())

    async def save_page(
        self, session: AsyncSession, *, exergue: str, sections: str, now: dt.datetime
    ) -> AboutPage:
        page = await self.get_page(session)
        if page is None:
            page = AboutPage(id=ABOUT_PAGE_ID)
            session.add(page)
        page.exergue = exergue
        page.sections = sections
        page.updated_at = now
        await self.flush(session)
        return page

    async def replace_clients(
        self, session: AsyncSession, clients: Sequence[AboutClient]
    ) -> None:
        with storage_errors():
            await session.execute(sa.delete(AboutClient))
        session.add_all(list(clients))
        await self.flush(session)

    async def replace_contacts(
        self, session: AsyncSession, contacts: Sequence[AboutContact]
    ) -> None:
        with storage_errors():
            await session.execute(sa.delete(AboutContact))
        session.add_all(list(contacts))
        await self.flush(session)
