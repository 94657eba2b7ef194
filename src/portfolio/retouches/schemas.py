from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from portfolio.commons.schemas import Pagination, Status
from portfolio.media.schemas import MediaPublic
from portfolio.seo.schemas import SEOInput, SEOPublic

RetoucheTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)
]


class CreateRetoucheRequest(BaseModel):
    title: RetoucheTitle
    before_image_id: UUID
    after_image_id: UUID
    status: Status
    seo: SEOInput | None = None


class RetoucheUpdate(BaseModel):
    """Partial update: only fields present in the payload are written."""

    title: RetoucheTitle | None = None
    before_image_id: UUID | None = None
    after_image_id: UUID | None = None
    status: Status | None = None
    seo: SEOInput | None = None


class RetouchePublic(BaseModel):
    id: UUID
    title: str
    before_image: MediaPublic
    after_image: MediaPublic
    status: Status
    seo: SEOPublic
    created_at: datetime
    updated_at: datetime


class ListRetouchesResponse(BaseModel):
    items: list[RetouchePublic]
    pagination: Pagination
