from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Path  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.depends import current_principal_optional, current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.legal.schemas import (
    LEGAL_TYPE_PATTERN,
    LegalPagePublic,
    LegalPageUpsert,
    ListLegalPagesResponse,
)
from portfolio.legal.service import LegalService

router = APIRouter(prefix="/legal", tags=["legal"])

LegalType = Annotated[str, Path(pattern=LEGAL_TYPE_PATTERN)]


@lru_cache
def get_legal_service() -> LegalService:
    return LegalService.create()


@router.get("", response_model=ListLegalPagesResponse)
async def list_legal_pages(
    principal: Annotated[Principal | None, Depends(current_principal_optional)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[LegalService, Depends(get_legal_service)],
) -> ListLegalPagesResponse:
    # Signed-in users also see unpublished pages.
    pages = await svc.list_pages(session, published_only=principal is None)
    return ListLegalPagesResponse(items=[LegalPagePublic.model_validate(p) for p in pages])


@router.get("/{page_type}", response_model=LegalPagePublic)
async def get_legal_page(
    page_type: LegalType,
    principal: Annotated[Principal | None, Depends(current_principal_optional)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[LegalService, Depends(get_legal_service)],
) -> LegalPagePublic:
    page = await svc.get_page(session, page_type=page_type, published_only=principal is None)
    return LegalPagePublic.model_validate(page)


@router.put("/{page_type}", response_model=LegalPagePublic)
async def upsert_legal_page(
    page_type: LegalType,
    req: LegalPageUpsert,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[LegalService, Depends(get_legal_service)],
) -> LegalPagePublic:
    page = await svc.upsert_page(session, page_type=page_type, req=req)
    return LegalPagePublic.model_validate(page)
