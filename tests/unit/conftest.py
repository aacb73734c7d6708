"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.assignment import Assignment


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.assignments = AsyncMock()
        self.groups = AsyncMock()
        self.peer_responses = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> str:
    return "student-1"


@pytest.fixture
def assignment_id() -> str:
    return "assignment-1"


@pytest.fixture
def group_assignment(assignment_id: str) -> Assignment:
    """A group assignment with groups of three."""
    return Assignment(id=assignment_id, group_assignment=True, max_group_size=3)
