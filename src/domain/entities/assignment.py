"""Assignment configuration entity (read-only for this service)."""

from dataclasses import dataclass
from datetime import datetime

from domain.entities.group import DEFAULT_MAX_GROUP_SIZE


@dataclass
class Assignment:
    """Settings of an assignment that govern groups and peer responses.

    ``response_word_limit`` is a minimum word count even though it is named
    a limit; ``response_character_limit`` is a maximum.
    """

    id: str
    course_id: str = ""
    title: str = ""
    group_assignment: bool = False
    max_group_size: int | None = None
    enable_peer_responses: bool = False
    response_due_date: datetime | None = None
    response_word_limit: int | None = None
    response_character_limit: int | None = None
    min_responses_required: int | None = None
    max_responses_per_video: int | None = None

    @property
    def effective_max_group_size(self) -> int:
        """Group capacity, falling back to the default when unset."""
        return self.max_group_size or DEFAULT_MAX_GROUP_SIZE
