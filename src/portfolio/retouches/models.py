from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow
from portfolio.seo.models import SEOColumnsMixin


class Retouche(SEOColumnsMixin, Base):
    __tablename__ = "retouches"
    __table_args__ = (
        sa.CheckConstraint(
            "status IN ('published', 'invisible')", name="retouches_status_check"
        ),
    )

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    title: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    # Plain media ids (no FK): the media service checks references before deleting.
    before_image_id: Mapped[UUID] = mapped_column(sa.Uuid(), nullable=False)
    after_image_id: Mapped[UUID] = mapped_column(sa.Uuid(), nullable=False)
    status: Mapped[str] = mapped_column(sa.Text(), nullable=False, index=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
