from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

ContactType = Literal["email", "phone", "instagram", "facebook", "twitter", "linkedin", "website"]

DEFAULT_EXERGUE = (
    "Valentine Arnaly is a photographer based in Toulouse, "
    "specializing in improving the brand image."
)
MAX_SECTIONS = 20
MAX_CLIENTS = 100
MAX_CONTACTS = 20


class TextSection(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(max_length=10000)


class ClientInput(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    logo_url: str | None = Field(default=None, max_length=500)
    website_url: str | None = Field(default=None, max_length=500)


class ContactInput(BaseModel):
    label: str = Field(min_length=1, max_length=100)
    value: str = Field(max_length=255)
    # Guessed from `value` when omitted.
    type: ContactType | None = None
    is_visible: bool = True


class AboutReplaceRequest(BaseModel):
    """Full replacement of the about page and its child collections."""

    exergue: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=10, max_length=1000)
    ]
    sections: list[TextSection] = Field(default_factory=list, max_length=MAX_SECTIONS)
    clients: list[ClientInput] = Field(default_factory=list, max_length=MAX_CLIENTS)
    contacts: list[ContactInput] = Field(default_factory=list, max_length=MAX_CONTACTS)


class ClientPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    logo_url: str | None = None
    website_url: str | None = None


class ContactPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    label: str
    value: str
    is_visible: bool


class AboutPublic(BaseModel):
    exergue: str
    sections: list[TextSection]
    clients: list[ClientPublic]
    contacts: list[ContactPublic]
    updated_at: datetime | None = None
