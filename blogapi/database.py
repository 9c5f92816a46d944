"""
Blog API — Database Handle and Session Management
===================================================

What:  Async SQLAlchemy engine, session factory, ORM base, and the FastAPI
       session dependency.
How:   `Database` owns one engine (and so one connection pool). It is built
       by `create_app()` and stored on `app.state.database`; there is no
       module-level engine. Handlers receive a session per request through
       `get_db_session`, which reads the handle off the running app.
Who:   Routes via `Depends(get_db_session)`; tests construct a `Database`
       around an in-memory SQLite engine.

Connection Pooling (PostgreSQL):
    pool_size / max_overflow from settings, pre-ping on checkout,
    connections recycled after an hour. SQLite URLs skip the sizing
    arguments and use SQLAlchemy's default pool for the dialect.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blogapi.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Alembic reads `Base.metadata` for autogenerate; tests call
    `create_all` on it to build a throwaway schema.
    """
    pass


class Database:
    """
    Explicitly constructed store handle: one engine plus its session factory.

    expire_on_commit=False keeps returned rows readable after a store
    operation commits, outside any further database round trip.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the engine described by `settings.database_url`."""
        kwargs = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(create_async_engine(settings.database_url, **kwargs))

    async def create_all(self) -> None:
        """Create every mapped table. Used by tests and local bootstrap, not production."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run `SELECT 1`; False if the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Stores commit their own writes. This dependency only guarantees a
    rollback on error and that the connection always returns to the pool.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
