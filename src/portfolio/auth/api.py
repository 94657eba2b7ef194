from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from portfolio.auth.delivery import MagicLinkDelivery
from portfolio.auth.depends import (
    current_principal_optional,
    current_principal_required,
    get_auth_service,
    get_magic_link_delivery,
    session_token,
)
from portfolio.auth.gate import Principal
from portfolio.auth.schemas import (
    ListSessionsResponse,
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    MeResponse,
    PrincipalPublic,
    SessionPublic,
    StatusResponse,
    VerifyResponse,
)
from portfolio.auth.service import AuthService
from portfolio.commons.depends import database_session
from portfolio.commons.logging import logger
from portfolio.commons.schemas import OkResponse
from portfolio.core.settings import settings
from portfolio.users.schemas import UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(resp: JSONResponse, token: str) -> None:
    resp.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=bool(settings.AUTH_COOKIE_SECURE),
        samesite=str(settings.AUTH_COOKIE_SAMESITE),  # type: ignore[arg-type]
        path="/",
        max_age=int(settings.AUTH_SESSION_TTL_DAYS) * 24 * 60 * 60,
    )


def _clear_session_cookie(resp: JSONResponse) -> None:
    resp.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
    )


def _principal_public(principal: Principal) -> PrincipalPublic:
    return PrincipalPublic(
        id=principal.user_id,
        email=principal.email,
        name=principal.name,
        role=principal.role,  # type: ignore[arg-type]
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
    delivery: Annotated[MagicLinkDelivery, Depends(get_magic_link_delivery)],
) -> LoginResponse:
    # Same answer whether or not the email is registered.
    await svc.request_magic_link(session, email=str(req.email), delivery=delivery)
    return LoginResponse()


@router.get("/verify", response_model=VerifyResponse)
async def verify(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
    token: str = Query(min_length=1, max_length=128),
) -> JSONResponse:
    user, record = await svc.verify(session, token=token)
    data = VerifyResponse(
        user=UserPublic.model_validate(user),
        token=record.token,
        expires_at=record.expires_at,
    ).model_dump(mode="json")
    resp = JSONResponse(status_code=status.HTTP_200_OK, content=data)
    _set_session_cookie(resp, record.token)
    return resp


@router.post("/logout", response_model=OkResponse)
async def logout(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    token = session_token(request)
    if token:
        await svc.revoke(session, token=token)
        logger.info("Logout")
    resp = JSONResponse(
        status_code=status.HTTP_200_OK, content=OkResponse(message="Logged out").model_dump()
    )
    _clear_session_cookie(resp)
    return resp


@router.get("/me", response_model=MeResponse)
async def me(
    principal: Annotated[Principal, Depends(current_principal_required)],
) -> MeResponse:
    return MeResponse(
        user=_principal_public(principal),
        session=SessionPublic(
            id=principal.session_id,
            created_at=principal.session_created_at,
            expires_at=principal.session_expires_at,
            is_current=True,
        ),
    )


@router.get("/status", response_model=StatusResponse)
async def auth_status(
    principal: Annotated[Principal | None, Depends(current_principal_optional)],
) -> StatusResponse:
    if principal is None:
        return StatusResponse(authenticated=False)
    return StatusResponse(authenticated=True, user=_principal_public(principal))


@router.get("/sessions", response_model=ListSessionsResponse)
async def list_sessions(
    principal: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> ListSessionsResponse:
    records = await svc.list_sessions(session, user_id=principal.user_id)
    return ListSessionsResponse(
        items=[
            SessionPublic(
                id=r.id,
                created_at=r.created_at,
                expires_at=r.expires_at,
                is_current=r.id == principal.session_id,
            )
            for r in records
        ]
    )


@router.delete("/sessions/{session_id}", response_model=OkResponse)
async def revoke_session(
    session_id: UUID,
    principal: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    await svc.revoke_session_for_user(
        session, user_id=principal.user_id, session_id=session_id
    )
    resp = JSONResponse(
        status_code=status.HTTP_200_OK, content=OkResponse(message="Session revoked").model_dump()
    )
    if session_id == principal.session_id:
        _clear_session_cookie(resp)
    return resp


@router.post("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    principal: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    revoked = await svc.revoke_all_for_user(session, user_id=principal.user_id)
    logger.info("Logout from all devices: user %s (%d session(s))", principal.user_id, revoked)
    resp = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=LogoutAllResponse(revoked=revoked).model_dump(),
    )
    _clear_session_cookie(resp)
    return resp
