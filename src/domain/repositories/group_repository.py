"""Group repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.group import Group, GroupMember


class MembershipConflict(Exception):
    """The user already holds a membership for the group's assignment."""

    def __init__(self, assignment_id: str, user_id: str) -> None:
        self.assignment_id = assignment_id
        self.user_id = user_id
        super().__init__(f"{user_id} already has a group for {assignment_id}")


class JoinCodeTaken(Exception):
    """Another group claimed the join code between the check and the insert."""

    def __init__(self, join_code: str) -> None:
        self.join_code = join_code
        super().__init__(f"join code {join_code} is already in use")


class IGroupRepository(Protocol):
    """Repository interface for Group entities."""

    async def get(self, id: UUID) -> Group | None:
        """Get a group by ID."""
        ...

    async def get_by_join_code(self, join_code: str) -> Group | None:
        """Resolve a join code to its group."""
        ...

    async def join_code_exists(self, join_code: str) -> bool:
        """Check whether any group already uses the join code."""
        ...

    async def get_for_assignment(self, assignment_id: str) -> list[Group]:
        """Get all groups of an assignment."""
        ...

    async def get_for_member(
        self, assignment_id: str, user_id: str
    ) -> Group | None:
        """Get the group the user belongs to for an assignment."""
        ...

    async def create(self, group: Group) -> Group:
        """Create a new group together with its initial members.

        Raises MembershipConflict if a member already has a group for the
        assignment, or JoinCodeTaken if the join code is no longer free.
        The transaction must be rolled back after either.
        """
        ...

    async def append_member(
        self, group_id: UUID, member: GroupMember, expected_size: int
    ) -> Group | None:
        """Atomically add a member if the group still has ``expected_size``
        members, is below capacity and has not submitted.

        Returns the updated group, or None when the condition did not hold.
        Raises MembershipConflict if the user already has a group for the
        assignment.
        """
        ...
