from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow
from portfolio.seo.models import SEOColumnsMixin


class Project(SEOColumnsMixin, Base):
    __tablename__ = "projects"
    __table_args__ = (
        sa.CheckConstraint(
            "status IN ('published', 'invisible')", name="projects_status_check"
        ),
    )

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    title: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    status: Mapped[str] = mapped_column(sa.Text(), nullable=False, index=True)
    is_draft: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False)
    # Ordered JSON array of media ids; hydrated through ProjectView.images().
    images: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="[]")
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
