"""Async database engine, session factory and request-scoped session dependency."""
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# Largest value an INTEGER column holds; the driver refuses to bind anything bigger
MAX_ROW_ID = 2**63 - 1


class Base(DeclarativeBase):
    pass


def is_row_id(value: int) -> bool:
    """True if value could be a stored primary key (ids start at 1)."""
    return 1 <= value <= MAX_ROW_ID


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE and FK checks unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def display_url(url: str) -> str:
    """Mask credentials, showing only the host/database part."""
    return "...@" + url.split("@")[-1].split("?")[0] if "@" in url else url


class Database:
    """
    Owns the async engine and session factory for one application instance.

    Created in the application lifespan, stored on ``app.state.db`` and
    disposed at shutdown; request handlers reach it through ``get_db``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Database URL: %s", display_url(url))

    async def create_all(self) -> None:
        import microblog.models  # noqa: F401  registers tables on Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
