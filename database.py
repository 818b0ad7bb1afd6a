import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase  # Base class for ORM models.

from config import async_database_url

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models (collects metadata)."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one database.

    One instance per process is the normal deployment. Build it at startup,
    call ``connect()``, and ``disconnect()`` on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = async_database_url(url)
        self.engine = create_async_engine(self.url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        # expire_on_commit=False keeps returned rows readable after commit.
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def connect(self) -> None:
        # Importing the models registers their tables on Base.metadata.
        import models  # noqa: F401

        async with self.engine.begin() as conn:
            # In production, migrations would own the schema instead of create_all
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Connected to %s", self.engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1


async def get_db(request: Request):
    # Dependency that yields a DB session and closes it after the request.
    async with request.app.state.database.session() as session:
        yield session
