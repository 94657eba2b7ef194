"""
Database manager (async SQLAlchemy over a single SQLite file).

A shared manager owns the engine and sessionmaker, and a dependency yields
sessions. Repositories translate driver errors through `storage_errors()` so
callers only ever see `DuplicateKeyException` or `StorageFaultException`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy import event  # type: ignore[import-not-found]
from sqlalchemy.exc import IntegrityError, SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import (  # type: ignore[import-not-found]
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from portfolio.commons.exceptions import BaseCoreException
from portfolio.commons.logging import logger
from portfolio.core.settings import settings


class DatabaseException(BaseCoreException):
    pass


class StorageFaultException(DatabaseException):
    pass


class DuplicateKeyException(DatabaseException):
    pass


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig) if exc.orig is not None else str(exc)
    return "UNIQUE constraint failed" in text


@contextmanager
def storage_errors() -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        if _is_unique_violation(exc):
            raise DuplicateKeyException("Duplicate entry", str(exc.orig)) from exc
        raise StorageFaultException("Integrity error", str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise StorageFaultException("Storage failure", str(exc)) from exc


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path
        self.engine: AsyncEngine | None = None
        self.sessionmaker: async_sessionmaker[AsyncSession] | None = None

    def _build_dsn(self) -> str:
        path = Path(self.db_path or settings.PORTFOLIO_DB_PATH)
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+aiosqlite:///{path}"

    async def initialize(self) -> None:
        if self.engine is not None:
            return
        try:
            dsn = self._build_dsn()
            self.engine = create_async_engine(dsn, echo=bool(settings.PORTFOLIO_DB_ECHO))
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)
            self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
            logger.info("Database initialized: %s", dsn)
        except Exception as exc:
            raise DatabaseException("Failed to initialize database", str(exc)) from exc

    async def create_all(self, metadata: sa.MetaData) -> None:
        await self.initialize()
        assert self.engine is not None
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def shutdown(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.sessionmaker = None
        logger.info("Database shut down")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.sessionmaker is None:
            raise DatabaseException("Database is not initialized")
        async with self.sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


database_manager = DatabaseManager()
