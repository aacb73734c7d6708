"""Database engine and session factory."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def _engine_options() -> dict[str, Any]:
    """Pool sizing for PostgreSQL; SQLite's pool accepts none of it."""
    options: dict[str, Any] = {"echo": settings.db_echo}
    if not settings.uses_sqlite:
        options.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    return options


engine = create_async_engine(settings.async_database_url, **_engine_options())

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a short-lived session (used by the readiness probe)."""
    async with async_session_factory() as session:
        yield session
