"""
Session lifecycle.

A session is a bearer token with an expiry. Verification sessions are short
lived and single use; `verify` trades one for an authenticated session.
Authenticated sessions slide forward when they get close to expiring.
Expired rows are removed lazily on lookup and by the periodic sweep.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.delivery import MagicLinkDelivery
from portfolio.auth.exceptions import (
    DELIVERY_FAILED,
    INVALID_OR_EXPIRED_TOKEN,
    INVALID_SESSION_MESSAGE,
    SESSION_NOT_FOUND,
    USER_NOT_FOUND,
    AuthServiceNotFoundException,
    InvalidOrExpiredTokenException,
    MagicLinkDeliveryException,
    UserNotFoundException,
)
from portfolio.auth.models import Session, User
from portfolio.auth.repository import SessionsRepository
from portfolio.commons.ids import new_id, new_token
from portfolio.commons.logging import logger
from portfolio.commons.relations import LazyRelation, resolve_optional
from portfolio.commons.sqltypes import utcnow
from portfolio.core.settings import settings
from portfolio.users.repository import UsersRepository

Clock = Callable[[], dt.datetime]


@dataclass(frozen=True)
class SessionPolicy:
    verification_ttl: dt.timedelta
    session_ttl: dt.timedelta
    renewal_threshold: dt.timedelta
    renewal_extension: dt.timedelta
    sweep_interval: dt.timedelta

    @classmethod
    def from_settings(cls) -> "SessionPolicy":
        return cls(
            verification_ttl=dt.timedelta(minutes=int(settings.AUTH_VERIFICATION_TTL_MINUTES)),
            session_ttl=dt.timedelta(days=int(settings.AUTH_SESSION_TTL_DAYS)),
            renewal_threshold=dt.timedelta(
                minutes=int(settings.AUTH_RENEWAL_THRESHOLD_MINUTES)
            ),
            renewal_extension=dt.timedelta(hours=int(settings.AUTH_RENEWAL_EXTENSION_HOURS)),
            sweep_interval=dt.timedelta(minutes=int(settings.AUTH_SWEEP_INTERVAL_MINUTES)),
        )


class SessionView:
    """A session row with its owner resolved on demand."""

    def __init__(self, record: Session, *, users_repo: UsersRepository) -> None:
        self.record = record
        self._users_repo = users_repo
        self._user: LazyRelation[User | None] = LazyRelation(self._load_user)

    async def _load_user(self, session: AsyncSession) -> User | None:
        return await resolve_optional(session, self._users_repo, self.record.user_id)

    async def user(self, session: AsyncSession) -> User | None:
        return await self._user.get(session)


@dataclass
class AuthService:
    sessions: SessionsRepository
    users: UsersRepository
    policy: SessionPolicy
    site_url: str
    clock: Clock = utcnow
    _last_sweep_at: dt.datetime | None = field(default=None, init=False, repr=False)

    @classmethod
    def create(cls) -> "AuthService":
        return cls(
            sessions=SessionsRepository(),
            users=UsersRepository(),
            policy=SessionPolicy.from_settings(),
            site_url=settings.SITE_URL,
        )

    def view(self, record: Session) -> SessionView:
        return SessionView(record, users_repo=self.users)

    def magic_link(self, token: str) -> str:
        return f"{self.site_url.rstrip('/')}/admin/verify?token={token}"

    async def _issue(
        self, session: AsyncSession, *, user_id: UUID, kind: str, ttl: dt.timedelta
    ) -> Session:
        now = self.clock()
        record = Session(
            id=new_id(),
            user_id=user_id,
            token=new_token(),
            kind=kind,
            expires_at=now + ttl,
            created_at=now,
        )
        return await self.sessions.create(session, record)

    async def _find_valid(self, session: AsyncSession, token: str | None) -> Session:
        if not token:
            raise InvalidOrExpiredTokenException(
                INVALID_SESSION_MESSAGE, INVALID_OR_EXPIRED_TOKEN
            )
        record = await self.sessions.find_by_token(session, token=token)
        if record is None:
            raise InvalidOrExpiredTokenException(
                INVALID_SESSION_MESSAGE, INVALID_OR_EXPIRED_TOKEN
            )
        if not record.is_valid(self.clock()):
            await self.sessions.delete(session, record.id)
            await session.commit()
            raise InvalidOrExpiredTokenException(
                INVALID_SESSION_MESSAGE, INVALID_OR_EXPIRED_TOKEN
            )
        return record

    async def _owner(self, session: AsyncSession, record: Session) -> User:
        user = await self.view(record).user(session)
        if user is None:
            raise UserNotFoundException(INVALID_SESSION_MESSAGE, USER_NOT_FOUND)
        return user

    async def create_verification(self, session: AsyncSession, *, user_id: UUID) -> Session:
        record = await self._issue(
            session, user_id=user_id, kind="verification", ttl=self.policy.verification_ttl
        )
        await session.commit()
        return record

    async def verify(self, session: AsyncSession, *, token: str) -> tuple[User, Session]:
        pending = await self._find_valid(session, token)
        if not pending.is_verification:
            raise InvalidOrExpiredTokenException(
                INVALID_SESSION_MESSAGE, INVALID_OR_EXPIRED_TOKEN
            )
        user = await self._owner(session, pending)

        await self.sessions.delete(session, pending.id)
        record = await self._issue(
            session, user_id=user.id, kind="authenticated", ttl=self.policy.session_ttl
        )
        await self.users.touch_last_login(session, user_id=user.id, now=self.clock())
        await session.commit()
        logger.info("Login: user %s, session %s", user.id, record.id)
        return user, record

    async def resolve(self, session: AsyncSession, *, token: str) -> tuple[User, Session]:
        record = await self._find_valid(session, token)
        user = await self._owner(session, record)

        if (
            not record.is_verification
            and record.remaining(self.clock()) < self.policy.renewal_threshold
        ):
            record = await self.sessions.extend_expiry(
                session,
                record=record,
                expires_at=record.expires_at + self.policy.renewal_extension,
            )
            await session.commit()
        return user, record

    async def revoke(self, session: AsyncSession, *, token: str) -> bool:
        deleted = await self.sessions.delete_by_token(session, token=token)
        await session.commit()
        return deleted

    async def revoke_by_id(self, session: AsyncSession, *, session_id: UUID) -> bool:
        deleted = await self.sessions.delete(session, session_id)
        await session.commit()
        return deleted

    async def revoke_all_for_user(self, session: AsyncSession, *, user_id: UUID) -> int:
        count = await self.sessions.delete_all_for_user(session, user_id=user_id)
        await session.commit()
        return count

    async def sweep_expired(self, session: AsyncSession) -> int:
        count = await self.sessions.delete_expired(session, now=self.clock())
        await session.commit()
        if count:
            logger.info("Swept %d expired session(s)", count)
        return count

    async def sweep_expired_if_due(self, session: AsyncSession) -> int | None:
        now = self.clock()
        last = self._last_sweep_at
        if last is not None and now - last < self.policy.sweep_interval:
            return None
        count = await self.sweep_expired(session)
        self._last_sweep_at = now
        return count

    async def request_magic_link(
        self, session: AsyncSession, *, email: str, delivery: MagicLinkDelivery
    ) -> None:
        user = await self.users.find_by_email(session, email=email)
        if user is None:
            logger.info("Magic link requested for unknown email")
            return

        record = await self.create_verification(session, user_id=user.id)
        try:
            sent = await delivery.send_magic_link(
                email=user.email, name=user.name, link=self.magic_link(record.token)
            )
        except Exception as exc:
            await self.revoke_by_id(session, session_id=record.id)
            raise MagicLinkDeliveryException(
                "Failed to send magic link", DELIVERY_FAILED
            ) from exc
        if not sent:
            await self.revoke_by_id(session, session_id=record.id)
            raise MagicLinkDeliveryException("Failed to send magic link", DELIVERY_FAILED)
        logger.info("Magic link issued for user %s", user.id)

    async def list_sessions(self, session: AsyncSession, *, user_id: UUID) -> list[Session]:
        return await self.sessions.list_active_for_user(
            session, user_id=user_id, now=self.clock()
        )

    async def revoke_session_for_user(
        self, session: AsyncSession, *, user_id: UUID, session_id: UUID
    ) -> None:
        record = await self.sessions.find_by_id(session, session_id)
        if record is None or record.user_id != user_id:
            raise AuthServiceNotFoundException("Session not found", SESSION_NOT_FOUND)
        await self.revoke_by_id(session, session_id=session_id)
