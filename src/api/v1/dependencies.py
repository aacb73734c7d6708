"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.group_service import GroupService
from domain.services.peer_response_service import PeerResponseService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_group_service() -> GroupService:
    """Get Group service instance."""
    return GroupService(get_uow_factory())


@lru_cache
def get_peer_response_service() -> PeerResponseService:
    """Get Peer Response service instance."""
    return PeerResponseService(get_uow_factory())
