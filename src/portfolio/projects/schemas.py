from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from portfolio.commons.schemas import Pagination, Status
from portfolio.media.schemas import MediaPublic
from portfolio.seo.schemas import SEOInput, SEOPublic

MAX_IMAGES = 50


class CreateProjectRequest(BaseModel):
    # Empty titles are allowed (drafts start blank).
    title: str = Field(default="", max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    status: Status
    is_draft: bool = False
    images: list[UUID] = Field(default_factory=list, max_length=MAX_IMAGES)
    seo: SEOInput | None = None


class ProjectUpdate(BaseModel):
    """Partial update: only fields present in the payload are written."""

    title: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    status: Status | None = None
    is_draft: bool | None = None
    images: list[UUID] | None = Field(default=None, max_length=MAX_IMAGES)
    seo: SEOInput | None = None


class ProjectPublic(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    status: Status
    is_draft: bool
    images: list[MediaPublic]
    seo: SEOPublic
    created_at: datetime
    updated_at: datetime


class ListProjectsResponse(BaseModel):
    items: list[ProjectPublic]
    pagination: Pagination
