"""
Request authorization gate.

`authenticate` turns a presented token into a `Principal` (or nothing);
`authorize` checks the principal's role. Every rejection reads the same to
the client; the specific reason is only logged.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Collection
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.exceptions import (
    INSUFFICIENT_ROLE,
    INVALID_SESSION_MESSAGE,
    NOT_AUTHENTICATED,
    AuthServiceUnauthorizedException,
    ForbiddenException,
    UnauthenticatedException,
)
from portfolio.auth.models import Session, User
from portfolio.auth.service import AuthService
from portfolio.commons.logging import logger


@dataclass(frozen=True)
class Principal:
    user_id: UUID
    email: str
    name: str
    role: str
    session_id: UUID
    session_created_at: dt.datetime
    session_expires_at: dt.datetime

    @classmethod
    def from_session(cls, user: User, record: Session) -> "Principal":
        return cls(
            user_id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            session_id=record.id,
            session_created_at=record.created_at,
            session_expires_at=record.expires_at,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True)
class AuthGate:
    service: AuthService

    async def authenticate(
        self, session: AsyncSession, token: str | None, *, required: bool = True
    ) -> Principal | None:
        if not token:
            if required:
                raise UnauthenticatedException(INVALID_SESSION_MESSAGE, NOT_AUTHENTICATED)
            return None
        try:
            user, record = await self.service.resolve(session, token=token)
        except AuthServiceUnauthorizedException as exc:
            logger.info("Session rejected: %s", exc.details)
            if required:
                raise UnauthenticatedException(
                    INVALID_SESSION_MESSAGE, NOT_AUTHENTICATED
                ) from exc
            return None
        if record.is_verification:
            # Magic-link tokens are only good for `verify`.
            logger.info("Session rejected: verification token used as bearer")
            if required:
                raise UnauthenticatedException(INVALID_SESSION_MESSAGE, NOT_AUTHENTICATED)
            return None
        return Principal.from_session(user, record)

    @staticmethod
    def authorize(principal: Principal | None, roles: Collection[str]) -> Principal:
        if principal is None:
            raise UnauthenticatedException(INVALID_SESSION_MESSAGE, NOT_AUTHENTICATED)
        if principal.role not in roles:
            logger.warning(
                "Forbidden: user %s with role %s needs one of %s",
                principal.user_id,
                principal.role,
                sorted(roles),
            )
            raise ForbiddenException("Insufficient permissions", INSUFFICIENT_ROLE)
        return principal
