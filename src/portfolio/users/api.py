from __future__ import annotations

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from portfolio.auth.depends import require_admin
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.commons.schemas import OkResponse
from portfolio.users.schemas import (
    CreateUserRequest,
    ListUsersResponse,
    UpdateEmailRequest,
    UpdateRoleRequest,
    UserPublic,
)
from portfolio.users.service import UsersService

router = APIRouter(prefix="/users", tags=["users"])


@lru_cache
def get_users_service() -> UsersService:
    return UsersService.create()


@router.get("", response_model=ListUsersResponse)
async def list_users(
    _: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> ListUsersResponse:
    users = await svc.list_users(session)
    return ListUsersResponse(items=[UserPublic.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: UUID,
    _: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    return UserPublic.model_validate(await svc.get_user(session, user_id=user_id))


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(
    req: CreateUserRequest,
    _: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    return UserPublic.model_validate(await svc.create_user(session, req=req))


@router.put("/{user_id}/role", response_model=UserPublic)
async def update_role(
    user_id: UUID,
    req: UpdateRoleRequest,
    principal: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    user = await svc.update_role(
        session, actor_id=principal.user_id, user_id=user_id, role=req.role
    )
    return UserPublic.model_validate(user)


@router.put("/{user_id}/email", response_model=UserPublic)
async def update_email(
    user_id: UUID,
    req: UpdateEmailRequest,
    principal: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> UserPublic:
    user = await svc.update_email(
        session, actor_id=principal.user_id, user_id=user_id, email=str(req.email)
    )
    return UserPublic.model_validate(user)


@router.delete("/{user_id}", response_model=OkResponse)
async def delete_user(
    user_id: UUID,
    principal: Annotated[Principal, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[UsersService, Depends(get_users_service)],
) -> OkResponse:
    await svc.delete_user(session, actor_id=principal.user_id, user_id=user_id)
    return OkResponse(message="User deleted")
