"""Group domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

# Capacity used when the assignment does not configure one
DEFAULT_MAX_GROUP_SIZE = 4


class GroupRole(StrEnum):
    """Role within a group."""

    LEADER = "leader"
    MEMBER = "member"


class GroupStatus(StrEnum):
    """Lifecycle state of a group.

    ``forming`` while seats remain, ``ready`` once at capacity, and
    ``submitted`` after the assignment is handed in (terminal for joins).
    """

    FORMING = "forming"
    READY = "ready"
    SUBMITTED = "submitted"


@dataclass
class GroupMember:
    """Domain entity for a group membership."""

    user_id: str
    first_name: str = ""
    last_name: str = ""
    role: GroupRole = GroupRole.MEMBER
    joined_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Group:
    """Domain entity for an assignment group."""

    assignment_id: str
    join_code: str
    group_name: str
    leader_id: str
    id: UUID = field(default_factory=uuid4)
    leader_name: str = ""
    members: list[GroupMember] = field(default_factory=list)
    max_size: int = DEFAULT_MAX_GROUP_SIZE
    status: GroupStatus = GroupStatus.FORMING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def member_ids(self) -> list[str]:
        """Member user IDs, leader first, then in join order."""
        return [member.user_id for member in self.members]

    @property
    def current_size(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return self.current_size >= self.max_size

    @property
    def is_submitted(self) -> bool:
        return self.status == GroupStatus.SUBMITTED

    def has_member(self, user_id: str) -> bool:
        """Check whether the user already belongs to this group."""
        return user_id in self.member_ids


def default_group_name(join_code: str) -> str:
    """Display name used when the creator does not supply one."""
    return f"Group {join_code}"
