from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.commons.schemas import Pagination

ALLOWED_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/svg+xml",
)
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


class MediaPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    filename: str
    url: str
    caption: str | None = None
    alt: str | None = None
    mime_type: str
    size: int
    width: int
    height: int
    created_at: datetime


class CreateMediaRequest(BaseModel):
    filename: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1)
    caption: str | None = Field(default=None, max_length=500)
    alt: str | None = Field(default=None, max_length=255)
    mime_type: str
    size: int = Field(ge=0, le=MAX_FILE_SIZE_BYTES)
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)

    @field_validator("mime_type")
    @classmethod
    def _check_mime_type(cls, value: str) -> str:
        if value not in ALLOWED_MIME_TYPES:
            raise ValueError(f"unsupported mime type: {value}")
        return value


class MediaUpdate(BaseModel):
    """Partial update; only descriptive fields are mutable."""

    filename: str | None = Field(default=None, min_length=1, max_length=255)
    url: str | None = Field(default=None, min_length=1)
    caption: str | None = Field(default=None, max_length=500)
    alt: str | None = Field(default=None, max_length=255)


class ListMediaResponse(BaseModel):
    items: list[MediaPublic]
    pagination: Pagination


class MediaTypesResponse(BaseModel):
    types: list[str]
