"""Unit of Work protocol."""

from types import TracebackType
from typing import Protocol

from domain.repositories.assignment_repository import IAssignmentRepository
from domain.repositories.group_repository import IGroupRepository
from domain.repositories.peer_response_repository import IPeerResponseRepository


class IUnitOfWork(Protocol):
    """One transaction spanning the assignment, group and response stores.

    Nothing is persisted until ``commit``; leaving the context with an
    exception rolls back.
    """

    assignments: IAssignmentRepository
    groups: IGroupRepository
    peer_responses: IPeerResponseRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...
