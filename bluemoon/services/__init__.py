"""Database connection and session management."""

import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bluemoon.config import settings
from bluemoon.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Map a plain SQLite URL onto the aiosqlite driver; other URLs pass through."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


DATABASE_URL = to_async_url(settings.database_url)

# An in-memory SQLite database only exists on one connection
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    async_engine = create_async_engine(
        DATABASE_URL,
        echo=settings.database_echo,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
elif DATABASE_URL.startswith("sqlite"):
    async_engine = create_async_engine(
        DATABASE_URL,
        echo=settings.database_echo,
        connect_args={"check_same_thread": False},
    )
else:
    async_engine = create_async_engine(DATABASE_URL, echo=settings.database_echo, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory (for services that open several sessions concurrently)."""
    return AsyncSessionLocal


async def commit_or_raise(session: AsyncSession, action: str) -> None:
    """Commit the session; on a store error roll back and raise StoreUnavailableError.

    Args:
        session: Session with pending changes
        action: What was being saved, used in the error message (e.g. "create payment")
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Failed to %s: %s", action, e, exc_info=True)
        raise StoreUnavailableError(f"Failed to {action}") from e


async def init_models() -> None:
    """Create all tables that do not exist yet."""
    from bluemoon.models import Base

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "async_engine",
    "AsyncSessionLocal",
    "get_async_session",
    "get_session_factory",
    "commit_or_raise",
    "init_models",
    "to_async_url",
]
