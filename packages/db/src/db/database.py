# This project was developed with assistance from AI tools.
"""Async engine, session factory and FastAPI session dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import db_settings

engine = create_async_engine(
    db_settings.DATABASE_URL,
    echo=db_settings.SQL_ECHO,
    pool_size=db_settings.DB_POOL_SIZE,
    pool_pre_ping=db_settings.DB_POOL_PRE_PING,
)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


class DatabaseService:
    """Owns the session factory used outside the request lifecycle."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = SessionLocal):
        self._session_factory = session_factory

    def session(self) -> AsyncSession:
        return self._session_factory()

    async def health_check(self) -> bool:
        from sqlalchemy import text

        async with self._session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1


_db_service: DatabaseService | None = None


def get_db_service() -> DatabaseService:
    """Return the process-wide DatabaseService, creating it on first use."""
    global _db_service  # noqa: PLW0603
    if _db_service is None:
        _db_service = DatabaseService()
    return _db_service


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with SessionLocal() as session:
        yield session
