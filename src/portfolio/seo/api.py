from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.depends import current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.seo.schemas import (
    RobotsModeRequest,
    RobotsModeResponse,
    SEOSettingsPublic,
    SEOSettingsUpdate,
    SEOStatusResponse,
)
from portfolio.seo.service import SEOSettingsService, robots_description

router = APIRouter(prefix="/seo", tags=["seo"])


@lru_cache
def get_seo_settings_service() -> SEOSettingsService:
    return SEOSettingsService.create()


@router.get("/settings", response_model=SEOSettingsPublic)
async def get_settings(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[SEOSettingsService, Depends(get_seo_settings_service)],
) -> SEOSettingsPublic:
    return await svc.get_settings(session)


@router.put("/settings", response_model=SEOSettingsPublic)
async def update_settings(
    changes: SEOSettingsUpdate,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[SEOSettingsService, Depends(get_seo_settings_service)],
) -> SEOSettingsPublic:
    return await svc.update_settings(session, changes=changes)


@router.put("/robots", response_model=RobotsModeResponse)
async def update_robots_mode(
    req: RobotsModeRequest,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[SEOSettingsService, Depends(get_seo_settings_service)],
) -> RobotsModeResponse:
    updated = await svc.set_robots_mode(session, mode=req.mode)
    return RobotsModeResponse(
        robots_mode=updated.robots_mode,
        robots_description=robots_description(updated.robots_mode),
    )


@router.get("/status", response_model=SEOStatusResponse)
async def get_status(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[SEOSettingsService, Depends(get_seo_settings_service)],
) -> SEOStatusResponse:
    return await svc.get_status(session)
