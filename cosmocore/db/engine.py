"""
PURPOSE: Async engine, connection pool and session wiring for Cosmocore.

The engine and session factory are built once per application in the
lifespan handler and kept on app.state; request handlers receive sessions
through the get_db dependency.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cosmocore.config.settings import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """
    PURPOSE: Create the bounded async connection pool from settings.

    SQLite URLs (used in tests) get SQLAlchemy's default pool, since the
    queue-pool sizing arguments only apply to server databases.

    Args:
        settings: Loaded application settings.

    Returns:
        AsyncEngine: Engine owning the connection pool.
    """
    if settings.DATABASE_URL.startswith("sqlite"):
        return create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def ping(engine: AsyncEngine) -> None:
    """
    PURPOSE: Run a trivial query to prove the database is reachable.

    Raises:
        Exception: Whatever the driver raises when the database is unreachable.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Async generator that yields database sessions for FastAPI Depends.

    Usage in routes:
        async def receive_signal(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
