"""
Global pytest fixtures.

Repository, service and API tests all run against a throwaway SQLite file
under `tmp_path`; nothing touches `data/portfolio.db`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.api.main import build_app
from portfolio.auth.depends import get_auth_service, get_magic_link_delivery
from portfolio.auth.models import User
from portfolio.auth.repository import SessionsRepository
from portfolio.auth.service import AuthService, SessionPolicy
from portfolio.commons.depends import database_session
from portfolio.commons.ids import new_id
from portfolio.core.db import DatabaseManager
from portfolio.core.schema import metadata
from portfolio.media.models import Media
from portfolio.users.repository import UsersRepository

START = dt.datetime(2026, 1, 1, 12, 0, tzinfo=dt.UTC)


class FakeClock:
    def __init__(self, now: dt.datetime) -> None:
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **delta: float) -> dt.datetime:
        self.now = self.now + dt.timedelta(**delta)
        return self.now


class RecordingDelivery:
    def __init__(self, *, ok: bool = True) -> None:
        self.ok = ok
        self.sent: list[dict[str, str]] = []

    async def send_magic_link(self, *, email: str, name: str, link: str) -> bool:
        self.sent.append({"email": email, "name": name, "link": link})
        return self.ok


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Default AnyIO backend for async tests."""
    return "asyncio"


@pytest.fixture()
async def db(tmp_path, anyio_backend) -> AsyncIterator[DatabaseManager]:  # type: ignore[no-untyped-def]
    manager = DatabaseManager(db_path=str(tmp_path / "portfolio.db"))
    await manager.create_all(metadata)
    yield manager
    await manager.shutdown()


@pytest.fixture()
async def session(db: DatabaseManager) -> AsyncIterator[AsyncSession]:
    async with db.session() as s:
        yield s


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture()
def auth_service(clock: FakeClock) -> AuthService:
    return AuthService(
        sessions=SessionsRepository(),
        users=UsersRepository(),
        policy=SessionPolicy.from_settings(),
        site_url="http://localhost:3000",
        clock=clock,
    )


@pytest.fixture()
def delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture()
def make_user(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _make(email: str = "admin@example.com", *, role: str = "admin") -> User:
        user = User(id=new_id(), email=email, name=email.split("@")[0], role=role)
        session.add(user)
        await session.commit()
        return user

    return _make


@pytest.fixture()
def make_media(session: AsyncSession) -> Callable[..., Awaitable[Media]]:
    async def _make(filename: str = "photo.jpg") -> Media:
        media = Media(
            id=new_id(),
            filename=filename,
            url=f"/uploads/{filename}",
            mime_type="image/jpeg",
            size=1024,
            width=800,
            height=600,
        )
        session.add(media)
        await session.commit()
        return media

    return _make


@pytest.fixture()
def login(
    session: AsyncSession, auth_service: AuthService
) -> Callable[[User], Awaitable[str]]:
    async def _login(user: User) -> str:
        pending = await auth_service.create_verification(session, user_id=user.id)
        _, record = await auth_service.verify(session, token=pending.token)
        return record.token

    return _login


@pytest.fixture()
def app(
    db: DatabaseManager, auth_service: AuthService, delivery: RecordingDelivery
) -> FastAPI:
    app = build_app()

    async def _database_session() -> AsyncIterator[AsyncSession]:
        async with db.session() as s:
            yield s

    app.dependency_overrides[database_session] = _database_session
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_magic_link_delivery] = lambda: delivery
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
