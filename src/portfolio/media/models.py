from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow


class Media(Base):
    __tablename__ = "media"

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    filename: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    url: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    caption: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    alt: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    mime_type: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    size: Mapped[int] = mapped_column(sa.Integer(), nullable=False)
    width: Mapped[int] = mapped_column(sa.Integer(), nullable=False, default=0)
    height: Mapped[int] = mapped_column(sa.Integer(), nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
