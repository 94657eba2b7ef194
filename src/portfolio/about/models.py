from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow

ABOUT_PAGE_ID = 1


class AboutPage(Base):
    """Single-row table; the page always lives at `ABOUT_PAGE_ID`."""

    __tablename__ = "about_page"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True)
    exergue: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    # JSON array of {"title", "content"} objects, in display order.
    sections: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="[]")
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )


class AboutClient(Base):
    __tablename__ = "about_clients"

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    name: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    website_url: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    order_index: Mapped[int] = mapped_column(sa.Integer(), nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )


class AboutContact(Base):
    __tablename__ = "about_contacts"

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    type: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="website")
    label: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    value: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    is_visible: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=True)
    order_index: Mapped[int] = mapped_column(sa.Integer(), nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
