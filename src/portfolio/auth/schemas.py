from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from portfolio.users.schemas import Role, UserPublic


class LoginRequest(BaseModel):
    email: EmailStr = Field(max_length=255)


class LoginResponse(BaseModel):
    ok: bool = True
    message: str = "If this email is registered, a login link has been sent."


class PrincipalPublic(BaseModel):
    id: UUID
    email: EmailStr
    name: str
    role: Role


class SessionPublic(BaseModel):
    id: UUID
    created_at: datetime
    expires_at: datetime
    is_current: bool = False


class VerifyResponse(BaseModel):
    user: UserPublic
    token: str
    expires_at: datetime


class MeResponse(BaseModel):
    user: PrincipalPublic
    session: SessionPublic


class StatusResponse(BaseModel):
    authenticated: bool
    user: PrincipalPublic | None = None


class ListSessionsResponse(BaseModel):
    items: list[SessionPublic]


class LogoutAllResponse(BaseModel):
    ok: bool = True
    revoked: int
