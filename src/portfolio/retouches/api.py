from __future__ import annotations

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status as http_status  # type: ignore[import-not-found]

from portfolio.auth.depends import current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.commons.schemas import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    OkResponse,
    Pagination,
    Status,
)
from portfolio.retouches.exceptions import (
    RETOUCHE_NOT_FOUND,
    RetouchesServiceNotFoundException,
)
from portfolio.retouches.schemas import (
    CreateRetoucheRequest,
    ListRetouchesResponse,
    RetouchePublic,
    RetoucheUpdate,
)
from portfolio.retouches.service import RetouchesService

router = APIRouter(prefix="/retouches", tags=["retouches"])
public_router = APIRouter(prefix="/public/retouches", tags=["public"])


@lru_cache
def get_retouches_service() -> RetouchesService:
    return RetouchesService.create()


async def _list(
    session: AsyncSession,
    svc: RetouchesService,
    *,
    status: str | None,
    page: int,
    limit: int,
) -> ListRetouchesResponse:
    views, total = await svc.list_retouches(session, status=status, page=page, limit=limit)
    return ListRetouchesResponse(
        items=[await v.to_public(session) for v in views],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("", response_model=ListRetouchesResponse)
async def list_retouches(
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
    status: Status | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ListRetouchesResponse:
    return await _list(session, svc, status=status, page=page, limit=limit)


@router.get("/{retouche_id}", response_model=RetouchePublic)
async def get_retouche(
    retouche_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
) -> RetouchePublic:
    view = await svc.get_retouche(session, retouche_id=retouche_id)
    return await view.to_public(session)


@router.post("", response_model=RetouchePublic, status_code=http_status.HTTP_201_CREATED)
async def create_retouche(
    req: CreateRetoucheRequest,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
) -> RetouchePublic:
    view = await svc.create_retouche(session, req=req)
    return await view.to_public(session)


@router.put("/{retouche_id}", response_model=RetouchePublic)
async def update_retouche(
    retouche_id: UUID,
    changes: RetoucheUpdate,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
) -> RetouchePublic:
    view = await svc.update_retouche(session, retouche_id=retouche_id, changes=changes)
    return await view.to_public(session)


@router.delete("/{retouche_id}", response_model=OkResponse)
async def delete_retouche(
    retouche_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
) -> OkResponse:
    await svc.delete_retouche(session, retouche_id=retouche_id)
    return OkResponse(message="Retouche deleted")


@public_router.get("", response_model=ListRetouchesResponse)
async def list_published_retouches(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ListRetouchesResponse:
    return await _list(session, svc, status="published", page=page, limit=limit)


@public_router.get("/{retouche_id}", response_model=RetouchePublic)
async def get_published_retouche(
    retouche_id: UUID,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[RetouchesService, Depends(get_retouches_service)],
) -> RetouchePublic:
    view = await svc.get_retouche(session, retouche_id=retouche_id)
    if view.retouche.status != "published":
        raise RetouchesServiceNotFoundException("Retouche not found", RETOUCHE_NOT_FOUND)
    return await view.to_public(session)
