"""Database configuration and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from dictapi.config import settings


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# NullPool creates fresh connections and closes them immediately after use,
# which keeps the CLI and the API from fighting over SQLite connections
engine = create_async_engine(
    settings.resolved_database_url,
    echo=False,
    poolclass=NullPool,
)


# Enable foreign key constraints for SQLite connections
# Use sync_engine to properly intercept aiosqlite connections
@event.listens_for(engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
    """Enable foreign key enforcement for SQLite."""
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> None:
    """Initialize database tables."""
    # Register every mapped class on Base.metadata before create_all
    import dictapi.models  # noqa: F401
    import dictapi.services.dictionary.cache  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for dependency injection."""
    async with async_session() as session:
        yield session
