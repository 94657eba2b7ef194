from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.about.schemas import AboutPublic, AboutReplaceRequest
from portfolio.about.service import AboutService
from portfolio.auth.depends import current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session

router = APIRouter(prefix="/about", tags=["about"])
public_router = APIRouter(prefix="/public/about", tags=["public"])


@lru_cache
def get_about_service() -> AboutService:
    return AboutService.create()


@router.get("", response_model=AboutPublic)
async def get_about(
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AboutService, Depends(get_about_service)],
) -> AboutPublic:
    return await svc.get_about(session)


@router.put("", response_model=AboutPublic)
async def replace_about(
    req: AboutReplaceRequest,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AboutService, Depends(get_about_service)],
) -> AboutPublic:
    return await svc.replace_about(session, req=req)


@public_router.get("", response_model=AboutPublic)
async def get_public_about(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AboutService, Depends(get_about_service)],
) -> AboutPublic:
    return await svc.get_about(session, public=True)
