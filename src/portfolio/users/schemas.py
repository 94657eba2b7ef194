from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Role = Literal["admin", "editor"]
ROLES: tuple[Role, ...] = ("admin", "editor")


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    name: str
    role: Role
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None


class CreateUserRequest(BaseModel):
    email: EmailStr = Field(max_length=255)
    role: Role = "editor"
    name: str | None = Field(default=None, max_length=100)


class UpdateRoleRequest(BaseModel):
    role: Role


class UpdateEmailRequest(BaseModel):
    email: EmailStr = Field(max_length=255)


class UserUpdate(BaseModel):
    """Partial update for a user row."""

    email: str | None = None
    name: str | None = None
    role: Role | None = None


class ListUsersResponse(BaseModel):
    items: list[UserPublic]
