from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware  # type: ignore[import-not-found]
import uvicorn  # type: ignore[import-not-found]

from portfolio.api.exceptions import configure_global_exception_handlers
from portfolio.api.routers import configure_routers
from portfolio.core.db import DatabaseManager, database_manager
from portfolio.core.schema import metadata
from portfolio.core.settings import settings
from portfolio.users.service import UsersService


async def seed_admin(manager: DatabaseManager, email: str) -> None:
    if not email.strip():
        return
    async with manager.session() as session:
        await UsersService.create().ensure_admin(session, email=email)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Only creates missing tables; schema changes go through alembic.
    await database_manager.create_all(metadata)
    await seed_admin(database_manager, settings.ADMIN_EMAIL)
    yield
    await database_manager.shutdown()


def build_app() -> FastAPI:
    app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION, lifespan=lifespan)
    # CORS: be forgiving about localhost vs 127.0.0.1, since devs commonly use either.
    raw_origins = [o.strip() for o in str(settings.CORS_ORIGINS).split(",") if o.strip()]
    origins: list[str] = []
    for o in raw_origins:
        origins.append(o)
        if o.startswith("http://localhost:"):
            origins.append(o.replace("http://localhost:", "http://127.0.0.1:", 1))
        elif o.startswith("http://127.0.0.1:"):
            origins.append(o.replace("http://127.0.0.1:", "http://localhost:", 1))
    # De-dupe while preserving order.
    seen: set[str] = set()
    origins = [o for o in origins if not (o in seen or seen.add(o))]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    configure_routers(app)
    configure_global_exception_handlers(app)
    return app


app = build_app()


def run() -> None:
    uvicorn.run(
        "portfolio.api.main:app",
        host=settings.API_HOST,
        port=int(settings.API_PORT),
        log_level="info",
    )
