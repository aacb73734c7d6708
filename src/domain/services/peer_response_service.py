"""Peer response validation service."""

from datetime import datetime, timezone
from typing import Callable, Optional

from core.exceptions import AssignmentNotFoundError
from domain.entities.assignment import Assignment
from domain.entities.peer_response import ValidationResult
from domain.repositories.unit_of_work import IUnitOfWork


def count_words(content: str) -> int:
    """Count whitespace-separated words in the trimmed content."""
    return len(content.split())


def count_characters(content: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count twice."""
    return len(content.encode("utf-16-le")) // 2


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PeerResponseService:
    """Checks whether a student may submit a peer response."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def validate(
        self,
        assignment_id: str,
        video_id: str,
        student_id: str,
        content: str,
        assignment: Optional[Assignment] = None,
    ) -> ValidationResult:
        """Validate a draft response without persisting anything.

        The feature gate and due date short-circuit with a single error.
        Word, character and per-video checks all run and accumulate their
        errors; the per-student quota only ever adds a warning.

        When ``assignment`` is omitted its configuration is loaded by ID.

        Raises:
            AssignmentNotFoundError: If no configuration was given and the
                assignment does not exist.
        """
        async with self._uow_factory() as uow:
            if assignment is None:
                assignment = await uow.assignments.get(assignment_id)
                if not assignment:
                    raise AssignmentNotFoundError(assignment_id)

            if not assignment.enable_peer_responses:
                return ValidationResult.rejected(
                    "Peer responses are not enabled for this assignment"
                )

            if assignment.response_due_date is not None:
                if self._clock() > _as_utc(assignment.response_due_date):
                    return ValidationResult.rejected("Response due date has passed")

            result = ValidationResult()

            if assignment.response_word_limit:
                limit = assignment.response_word_limit
                words = count_words(content)
                if words < limit:
                    result.add_error(
                        f"Response must be at least {limit} words (currently {words})"
                    )

            if assignment.response_character_limit:
                limit = assignment.response_character_limit
                chars = count_characters(content)
                if chars > limit:
                    result.add_error(
                        f"Response must be no more than {limit} characters "
                        f"(currently {chars})"
                    )

            if assignment.min_responses_required:
                minimum = assignment.min_responses_required
                written = await uow.peer_responses.count_for_student(
                    assignment_id, student_id
                )
                if written >= minimum:
                    result.add_warning(
                        f"You have already completed the minimum of {minimum} "
                        f"responses (currently {written})"
                    )

            if assignment.max_responses_per_video:
                limit = assignment.max_responses_per_video
                received = await uow.peer_responses.count_for_video(video_id)
                if received >= limit:
                    result.add_error(
                        "This video has reached the maximum number of "
                        f"responses ({limit})"
                    )

            return result
