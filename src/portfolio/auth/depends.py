from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.delivery import LoggingMagicLinkDelivery, MagicLinkDelivery
from portfolio.auth.gate import AuthGate, Principal
from portfolio.auth.service import AuthService
from portfolio.commons.depends import database_session
from portfolio.core.settings import settings
from portfolio.users.schemas import ROLES


@lru_cache
def get_auth_service() -> AuthService:
    # Process-wide: the sweep throttle lives on this instance.
    return AuthService.create()


@lru_cache
def get_magic_link_delivery() -> MagicLinkDelivery:
    return LoggingMagicLinkDelivery()


def session_token(request: Request) -> str | None:
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


async def current_principal_optional(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> Principal | None:
    await svc.sweep_expired_if_due(session)
    return await AuthGate(svc).authenticate(
        session, session_token(request), required=False
    )


async def current_principal_required(
    principal: Annotated[Principal | None, Depends(current_principal_optional)],
) -> Principal:
    return AuthGate.authorize(principal, ROLES)


def require_roles(*roles: str) -> Callable[..., Awaitable[Principal]]:
    async def dependency(
        principal: Annotated[Principal, Depends(current_principal_required)],
    ) -> Principal:
        return AuthGate.authorize(principal, roles)

    return dependency


require_admin = require_roles("admin")
