from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

LEGAL_TYPE_PATTERN = r"^[a-z0-9][a-z0-9-]{0,49}$"


class LegalPageUpsert(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(max_length=50000)
    # Omitted: new pages are published, existing pages keep their flag.
    is_published: bool | None = None


class LegalPagePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    title: str
    content: str
    is_published: bool
    updated_at: datetime


class ListLegalPagesResponse(BaseModel):
    items: list[LegalPagePublic]
