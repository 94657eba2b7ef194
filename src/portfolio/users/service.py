from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.auth.models import User
from portfolio.auth.repository import SessionsRepository
from portfolio.commons.ids import new_id
from portfolio.commons.logging import logger
from portfolio.commons.sqltypes import utcnow
from portfolio.users.exceptions import (
    EMAIL_TAKEN,
    LAST_ADMIN,
    SELF_DELETE,
    SELF_ROLE_CHANGE,
    USER_NOT_FOUND,
    LastAdminException,
    UsersServiceConflictException,
    UsersServiceForbiddenException,
    UsersServiceNotFoundException,
)
from portfolio.users.repository import UsersRepository
from portfolio.users.schemas import CreateUserRequest, Role, UserUpdate

MAX_USERS = 500


@dataclass(frozen=True)
class UsersService:
    repo: UsersRepository
    sessions: SessionsRepository

    @classmethod
    def create(cls) -> "UsersService":
        return cls(repo=UsersRepository(), sessions=SessionsRepository())

    async def _get(self, session: AsyncSession, user_id: UUID) -> User:
        user = await self.repo.find_by_id(session, user_id)
        if user is None:
            raise UsersServiceNotFoundException("User not found", USER_NOT_FOUND)
        return user

    async def _ensure_email_free(
        self, session: AsyncSession, email: str, *, owner_id: UUID | None = None
    ) -> None:
        existing = await self.repo.find_by_email(session, email=email)
        if existing is not None and existing.id != owner_id:
            raise UsersServiceConflictException(
                "A user with this email already exists", EMAIL_TAKEN
            )

    async def _ensure_not_last_admin(self, session: AsyncSession, user: User) -> None:
        if user.role != "admin":
            return
        admins = await self.repo.count(session, role="admin")
        if admins <= 1:
            raise LastAdminException("Cannot remove the last admin user", LAST_ADMIN)

    async def list_users(self, session: AsyncSession) -> list[User]:
        return await self.repo.find_all(session, limit=MAX_USERS)

    async def get_user(self, session: AsyncSession, *, user_id: UUID) -> User:
        return await self._get(session, user_id)

    async def create_user(self, session: AsyncSession, *, req: CreateUserRequest) -> User:
        email = str(req.email).strip().lower()
        await self._ensure_email_free(session, email)
        name = (req.name or "").strip() or email.split("@", 1)[0]
        now = utcnow()
        user = User(
            id=new_id(),
            email=email,
            name=name,
            role=req.role,
            created_at=now,
            updated_at=now,
        )
        await self.repo.create(session, user)
        await session.commit()
        logger.info("User created: %s (%s)", user.id, user.role)
        return user

    async def update_role(
        self, session: AsyncSession, *, actor_id: UUID, user_id: UUID, role: Role
    ) -> User:
        if actor_id == user_id:
            raise UsersServiceForbiddenException(
                "Cannot modify your own role", SELF_ROLE_CHANGE
            )
        user = await self._get(session, user_id)
        if role != "admin":
            await self._ensure_not_last_admin(session, user)
        updated = await self.repo.update(session, user_id, UserUpdate(role=role))
        if updated is None:
            raise UsersServiceNotFoundException("User not found", USER_NOT_FOUND)
        await session.commit()
        logger.info("User role updated: %s -> %s by %s", user_id, role, actor_id)
        return updated

    async def update_email(
        self, session: AsyncSession, *, actor_id: UUID, user_id: UUID, email: str
    ) -> User:
        email = email.strip().lower()
        await self._get(session, user_id)
        await self._ensure_email_free(session, email, owner_id=user_id)
        updated = await self.repo.update(session, user_id, UserUpdate(email=email))
        if updated is None:
            raise UsersServiceNotFoundException("User not found", USER_NOT_FOUND)
        await session.commit()
        logger.info("User email updated: %s by %s", user_id, actor_id)
        return updated

    async def delete_user(
        self, session: AsyncSession, *, actor_id: UUID, user_id: UUID
    ) -> None:
        if actor_id == user_id:
            raise UsersServiceForbiddenException("Cannot delete your own account", SELF_DELETE)
        user = await self._get(session, user_id)
        await self._ensure_not_last_admin(session, user)
        revoked = await self.sessions.delete_all_for_user(session, user_id=user_id)
        await self.repo.delete(session, user_id)
        await session.commit()
        logger.info("User deleted: %s by %s (%d session(s) revoked)", user_id, actor_id, revoked)

    async def ensure_admin(self, session: AsyncSession, *, email: str) -> User | None:
        """Create or promote `email` to admin when the store has no admin yet."""
        email = email.strip().lower()
        if not email:
            return None
        if await self.repo.count(session, role="admin") > 0:
            return None
        existing = await self.repo.find_by_email(session, email=email)
        if existing is not None:
            user = await self.repo.update(session, existing.id, UserUpdate(role="admin"))
        else:
            now = utcnow()
            user = await self.repo.create(
                session,
                User(
                    id=new_id(),
                    email=email,
                    name=email.split("@", 1)[0],
                    role="admin",
                    created_at=now,
                    updated_at=now,
                ),
            )
        await session.commit()
        logger.info("Seeded admin user: %s", email)
        return user
