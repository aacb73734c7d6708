"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_assignment_repo import (
    SQLAlchemyAssignmentRepository,
)
from infrastructure.database.repositories.sqlalchemy_group_repo import SQLAlchemyGroupRepository
from infrastructure.database.repositories.sqlalchemy_peer_response_repo import (
    SQLAlchemyPeerResponseRepository,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Repositories are created once per context so per-repository caches
    live as long as the transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._assignments: Optional[SQLAlchemyAssignmentRepository] = None
        self._groups: Optional[SQLAlchemyGroupRepository] = None
        self._peer_responses: Optional[SQLAlchemyPeerResponseRepository] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def assignments(self) -> SQLAlchemyAssignmentRepository:
        """Get assignment repository."""
        if self._assignments is None:
            self._assignments = SQLAlchemyAssignmentRepository(self._require_session())
        return self._assignments

    @property
    def groups(self) -> SQLAlchemyGroupRepository:
        """Get group repository."""
        if self._groups is None:
            self._groups = SQLAlchemyGroupRepository(self._require_session())
        return self._groups

    @property
    def peer_responses(self) -> SQLAlchemyPeerResponseRepository:
        """Get peer response repository."""
        if self._peer_responses is None:
            self._peer_responses = SQLAlchemyPeerResponseRepository(
                self._require_session()
            )
        return self._peer_responses

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
            self._assignments = None
            self._groups = None
            self._peer_responses = None
