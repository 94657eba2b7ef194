from __future__ import annotations

import datetime as dt

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow


class LegalPage(Base):
    """One page per type slug (e.g. `mentions-legales`, `privacy`)."""

    __tablename__ = "legal_pages"

    type: Mapped[str] = mapped_column(sa.Text(), primary_key=True)
    title: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    content: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    is_published: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=True)
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
