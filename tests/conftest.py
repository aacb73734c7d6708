"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from infrastructure.database.models import AssignmentModel, Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database (SQLite in memory, shared through a single connection)
TEST_DATABASE_URL = settings.test_database_url


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to the test engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    """Unit of Work factory backed by the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def add_assignment(session_factory: async_sessionmaker[AsyncSession]):
    """Insert an assignment row; keyword arguments override the defaults."""

    async def _add(assignment_id: str, **settings: Any) -> AssignmentModel:
        model = AssignmentModel(
            id=assignment_id,
            course_id=settings.pop("course_id", "course-1"),
            title=settings.pop("title", f"Assignment {assignment_id}"),
            **settings,
        )
        async with session_factory() as session:
            session.add(model)
            await session.commit()
        return model

    return _add


@pytest.fixture
async def client(
    uow_factory: Any,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client wired to the in-memory database.

    Service dependencies are overridden so every request runs against the
    per-test SQLite engine.
    """
    from api.v1.dependencies import get_group_service, get_peer_response_service
    from domain.services.group_service import GroupService
    from domain.services.peer_response_service import PeerResponseService
    from main import create_app

    app = create_app()

    app.dependency_overrides[get_group_service] = lambda: GroupService(uow_factory)
    app.dependency_overrides[get_peer_response_service] = lambda: PeerResponseService(
        uow_factory
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
