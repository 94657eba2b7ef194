from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.auth.models import Base
from portfolio.commons.sqltypes import UTCDateTime, utcnow

SEO_SETTINGS_ID = 1


class SEOColumnsMixin:
    """Embedded SEO sub-record shared by projects and retouches."""

    seo_title: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    seo_description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    # JSON array of strings
    seo_keywords: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    # Media id, not a foreign key: an unresolvable id reads as "no image".
    seo_og_image_id: Mapped[UUID | None] = mapped_column(sa.Uuid(), nullable=True)


class SEOSettings(Base):
    """Site-wide SEO settings. Single row at `SEO_SETTINGS_ID`."""

    __tablename__ = "seo_settings"
    __table_args__ = (
        sa.CheckConstraint(
            "robots_mode IN ('allow_all', 'protect_admin', 'block_all')",
            name="seo_settings_robots_mode_check",
        ),
    )

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True)
    site_name: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    author_name: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    contact_email: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    location: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    robots_mode: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="allow_all")
    google_verification: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    facebook_verification: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    pinterest_verification: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    bing_verification: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    default_language: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="fr")
    copyright_text: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
