from __future__ import annotations

import datetime as dt
from uuid import UUID

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column  # type: ignore[import-not-found]

from portfolio.commons.sqltypes import UTCDateTime, utcnow


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        sa.CheckConstraint("role IN ('admin', 'editor')", name="users_role_check"),
    )

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    email: Mapped[str] = mapped_column(
        sa.Text(collation="NOCASE"), nullable=False, unique=True
    )
    name: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="")
    role: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="editor")
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )
    last_login_at: Mapped[dt.datetime | None] = mapped_column(
        UTCDateTime(), nullable=True
    )


class Session(Base):
    __tablename__ = "sessions"
    __table_args__ = (
        sa.CheckConstraint(
            "kind IN ('verification', 'authenticated')", name="sessions_kind_check"
        ),
    )

    id: Mapped[UUID] = mapped_column(sa.Uuid(), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(sa.Text(), nullable=False, unique=True)
    kind: Mapped[str] = mapped_column(sa.Text(), nullable=False, default="authenticated")
    expires_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, index=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    @property
    def is_verification(self) -> bool:
        return self.kind == "verification"

    def is_valid(self, now: dt.datetime) -> bool:
        return now < self.expires_at

    def remaining(self, now: dt.datetime) -> dt.timedelta:
        return self.expires_at - now
