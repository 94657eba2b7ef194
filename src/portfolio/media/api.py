from __future__ import annotations

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from portfolio.auth.depends import current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.commons.schemas import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    OkResponse,
    Pagination,
)
from portfolio.media.schemas import (
    ALLOWED_MIME_TYPES,
    CreateMediaRequest,
    ListMediaResponse,
    MediaPublic,
    MediaTypesResponse,
    MediaUpdate,
)
from portfolio.media.service import MediaService

router = APIRouter(prefix="/media", tags=["media"])


@lru_cache
def get_media_service() -> MediaService:
    return MediaService.create()


@router.get("", response_model=ListMediaResponse)
async def list_media(
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[MediaService, Depends(get_media_service)],
    mime_type: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ListMediaResponse:
    rows, total = await svc.list_media(session, mime_type=mime_type, page=page, limit=limit)
    return ListMediaResponse(
        items=[MediaPublic.model_validate(m) for m in rows],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("/types", response_model=MediaTypesResponse)
async def media_types(
    _: Annotated[Principal, Depends(current_principal_required)],
) -> MediaTypesResponse:
    return MediaTypesResponse(types=list(ALLOWED_MIME_TYPES))


@router.get("/{media_id}", response_model=MediaPublic)
async def get_media(
    media_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[MediaService, Depends(get_media_service)],
) -> MediaPublic:
    return MediaPublic.model_validate(await svc.get_media(session, media_id=media_id))


@router.post("", response_model=MediaPublic, status_code=status.HTTP_201_CREATED)
async def register_media(
    req: CreateMediaRequest,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[MediaService, Depends(get_media_service)],
) -> MediaPublic:
    return MediaPublic.model_validate(await svc.register_media(session, req=req))


@router.put("/{media_id}", response_model=MediaPublic)
async def update_media(
    media_id: UUID,
    changes: MediaUpdate,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[MediaService, Depends(get_media_service)],
) -> MediaPublic:
    media = await svc.update_media(session, media_id=media_id, changes=changes)
    return MediaPublic.model_validate(media)


@router.delete("/{media_id}", response_model=OkResponse)
async def delete_media(
    media_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[MediaService, Depends(get_media_service)],
) -> OkResponse:
    await svc.delete_media(session, media_id=media_id)
    return OkResponse(message="Media deleted")
