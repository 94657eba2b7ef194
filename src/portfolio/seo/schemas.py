from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.media.schemas import MediaPublic


class SEOInput(BaseModel):
    title: str | None = Field(default=None, max_length=60)
    description: str | None = Field(default=None, max_length=160)
    keywords: list[str] = Field(default_factory=list, max_length=10)
    og_image_id: UUID | None = None


class SEOPublic(BaseModel):
    title: str | None = None
    description: str | None = None
    keywords: list[str] = Field(default_factory=list)
    og_image: MediaPublic | None = None


RobotsMode = Literal["allow_all", "protect_admin", "block_all"]

# Labels the admin UI uses for the robots modes.
ROBOTS_MODE_ALIASES: dict[str, str] = {
    "everyone": "allow_all",
    "secured": "protect_admin",
    "invisible": "block_all",
}


class SEOSettingsPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    site_name: str
    author_name: str
    contact_email: str
    location: str
    robots_mode: RobotsMode
    google_verification: str
    facebook_verification: str
    pinterest_verification: str
    bing_verification: str
    default_language: str
    copyright_text: str
    updated_at: datetime | None = None


class SEOSettingsUpdate(BaseModel):
    """Partial update: only fields present in the payload are written."""

    site_name: str | None = Field(default=None, max_length=100)
    author_name: str | None = Field(default=None, max_length=100)
    contact_email: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=100)
    robots_mode: RobotsMode | None = None
    google_verification: str | None = Field(default=None, max_length=255)
    facebook_verification: str | None = Field(default=None, max_length=255)
    pinterest_verification: str | None = Field(default=None, max_length=255)
    bing_verification: str | None = Field(default=None, max_length=255)
    default_language: str | None = Field(default=None, min_length=2, max_length=10)
    copyright_text: str | None = Field(default=None, max_length=255)


class RobotsModeRequest(BaseModel):
    mode: RobotsMode

    @field_validator("mode", mode="before")
    @classmethod
    def _resolve_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return ROBOTS_MODE_ALIASES.get(value, value)
        return value


class RobotsModeResponse(BaseModel):
    robots_mode: RobotsMode
    robots_description: str


class SEOCheck(BaseModel):
    name: str
    status: Literal["good", "warning", "missing"]
    description: str


class SEOStatusResponse(BaseModel):
    overall: Literal["good", "warning", "error"]
    checks: list[SEOCheck]
    robots_mode: RobotsMode
    robots_description: str
