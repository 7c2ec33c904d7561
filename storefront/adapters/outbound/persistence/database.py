# storefront/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.models.base_model import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> AsyncEngine:
    """
    Async engine for ``url``.

    SQLite (aiosqlite) gets no pool, since its connections belong to the
    event loop that opened them, and foreign keys switched on per
    connection. Server databases get a bounded, pre-pinged pool.
    """
    if url.startswith("sqlite"):
        sqlite_engine = create_async_engine(url, echo=False, poolclass=NullPool)
        event.listen(sqlite_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_async_engine(
        url,
        echo=False,
        pool_size=20,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True
    )


database_url = str(settings.DATABASE_URL)
logger.info(f"Database target: {database_url.split('@')[-1]}")

try:
    engine = build_engine(database_url)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
except SQLAlchemyError as e:
    logger.error(f"Could not configure the database engine: {e}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    One unit of work.

    Commits when the block exits normally and rolls back when it raises,
    so the writes made inside land together or not at all::

        async with get_db_context() as db:
            await AsyncRefreshTokenRepository(db).delete_expired(utcnow())
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: a request scoped unit of work."""
    async with get_db_context() as session:
        yield session


async def create_tables() -> None:
    """Create missing tables; existing ones are left untouched."""
    # Importing the models package registers every table on Base.metadata
    import storefront.adapters.outbound.persistence.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
