"""Unit tests for PeerResponseService."""

from datetime import datetime, timedelta, timezone

import pytest

from core.exceptions import AssignmentNotFoundError
from domain.entities.assignment import Assignment
from domain.services.peer_response_service import (
    PeerResponseService,
    count_characters,
    count_words,
)
from tests.unit.conftest import FakeUnitOfWork

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PeerResponseService:
    uow.peer_responses.count_for_student.return_value = 0
    uow.peer_responses.count_for_video.return_value = 0
    return PeerResponseService(lambda: uow, clock=lambda: NOW)


def _assignment(**settings) -> Assignment:
    settings.setdefault("enable_peer_responses", True)
    return Assignment(id="assignment-1", **settings)


def _words(n: int) -> str:
    return " ".join(["word"] * n)


class TestCountWords:
    def test_counts_whitespace_separated_words(self):
        assert count_words("  the quick\tbrown\n fox  ") == 4

    def test_empty_content_has_no_words(self):
        assert count_words("") == 0
        assert count_words("   ") == 0


class TestCountCharacters:
    def test_plain_text(self):
        assert count_characters("héllo") == 5

    def test_astral_characters_count_twice(self):
        assert count_characters("😀😀") == 4


class TestGates:
    @pytest.mark.asyncio
    async def test_disabled_feature_rejects_with_single_error(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        assignment = _assignment(
            enable_peer_responses=False,
            response_word_limit=50,
            max_responses_per_video=1,
        )

        result = await service.validate("assignment-1", "v1", "s1", "", assignment)

        assert result.can_submit is False
        assert result.errors == ["Peer responses are not enabled for this assignment"]
        assert result.warnings == []
        uow.peer_responses.count_for_video.assert_not_called()

    @pytest.mark.asyncio
    async def test_past_due_date_rejects_with_single_error(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(
            response_due_date=NOW - timedelta(days=1),
            response_word_limit=50,
        )

        result = await service.validate(
            "assignment-1", "v1", "s1", "too short", assignment
        )

        assert result.can_submit is False
        assert result.errors == ["Response due date has passed"]

    @pytest.mark.asyncio
    async def test_naive_due_date_is_treated_as_utc(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(
            response_due_date=datetime(2026, 3, 15, 11, 59),
        )

        result = await service.validate("assignment-1", "v1", "s1", "ok", assignment)

        assert result.errors == ["Response due date has passed"]

    @pytest.mark.asyncio
    async def test_future_due_date_passes(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(response_due_date=NOW + timedelta(hours=1))

        result = await service.validate("assignment-1", "v1", "s1", "ok", assignment)

        assert result.can_submit is True
        assert result.errors == []


class TestLengthRules:
    @pytest.mark.asyncio
    async def test_word_minimum_reports_counts(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(response_word_limit=50)

        result = await service.validate(
            "assignment-1", "v1", "s1", _words(30), assignment
        )

        assert result.can_submit is False
        assert result.errors == ["Response must be at least 50 words (currently 30)"]

    @pytest.mark.asyncio
    async def test_word_minimum_met_exactly(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(response_word_limit=50)

        result = await service.validate(
            "assignment-1", "v1", "s1", _words(50), assignment
        )

        assert result.can_submit is True

    @pytest.mark.asyncio
    async def test_character_maximum(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(response_character_limit=10)

        result = await service.validate(
            "assignment-1", "v1", "s1", "a" * 11, assignment
        )

        assert result.errors == [
            "Response must be no more than 10 characters (currently 11)"
        ]

    @pytest.mark.asyncio
    async def test_character_maximum_counts_emoji_as_two(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(response_character_limit=3)

        result = await service.validate("assignment-1", "v1", "s1", "😀😀", assignment)

        assert result.can_submit is False
        assert result.errors == [
            "Response must be no more than 3 characters (currently 4)"
        ]

    @pytest.mark.asyncio
    async def test_zero_limits_are_ignored(
        self,
        service: PeerResponseService,
    ):
        assignment = _assignment(
            response_word_limit=0,
            response_character_limit=0,
            max_responses_per_video=0,
        )

        result = await service.validate("assignment-1", "v1", "s1", "", assignment)

        assert result.can_submit is True

    @pytest.mark.asyncio
    async def test_errors_accumulate(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.peer_responses.count_for_video.return_value = 3
        assignment = _assignment(
            response_word_limit=100,
            response_character_limit=5,
            max_responses_per_video=3,
        )

        result = await service.validate(
            "assignment-1", "v1", "s1", "one two three", assignment
        )

        assert result.can_submit is False
        assert result.errors == [
            "Response must be at least 100 words (currently 3)",
            "Response must be no more than 5 characters (currently 13)",
            "This video has reached the maximum number of responses (3)",
        ]


class TestCountRules:
    @pytest.mark.asyncio
    async def test_student_quota_met_only_warns(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.peer_responses.count_for_student.return_value = 3
        assignment = _assignment(min_responses_required=3)

        result = await service.validate(
            "assignment-1", "v1", "s1", "Great job", assignment
        )

        assert result.can_submit is True
        assert result.errors == []
        assert result.warnings == [
            "You have already completed the minimum of 3 responses (currently 3)"
        ]
        uow.peer_responses.count_for_student.assert_awaited_once_with(
            "assignment-1", "s1"
        )

    @pytest.mark.asyncio
    async def test_student_below_quota_has_no_warning(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.peer_responses.count_for_student.return_value = 1
        assignment = _assignment(min_responses_required=3)

        result = await service.validate("assignment-1", "v1", "s1", "ok", assignment)

        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_video_at_cap_is_rejected(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.peer_responses.count_for_video.return_value = 5
        assignment = _assignment(max_responses_per_video=5)

        result = await service.validate("assignment-1", "v1", "s1", "ok", assignment)

        assert result.can_submit is False
        assert result.errors == [
            "This video has reached the maximum number of responses (5)"
        ]
        uow.peer_responses.count_for_video.assert_awaited_once_with("v1")

    @pytest.mark.asyncio
    async def test_unset_counts_skip_store(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        result = await service.validate(
            "assignment-1", "v1", "s1", "ok", _assignment()
        )

        assert result.can_submit is True
        uow.peer_responses.count_for_student.assert_not_called()
        uow.peer_responses.count_for_video.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_input_gives_same_result(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.peer_responses.count_for_video.return_value = 2
        assignment = _assignment(response_word_limit=5, max_responses_per_video=2)

        first = await service.validate("assignment-1", "v1", "s1", "hi", assignment)
        second = await service.validate("assignment-1", "v1", "s1", "hi", assignment)

        assert first == second


class TestAssignmentLookup:
    @pytest.mark.asyncio
    async def test_loads_assignment_when_omitted(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.assignments.get.return_value = _assignment(response_word_limit=3)

        result = await service.validate("assignment-1", "v1", "s1", "two words")

        uow.assignments.get.assert_awaited_once_with("assignment-1")
        assert result.errors == ["Response must be at least 3 words (currently 2)"]

    @pytest.mark.asyncio
    async def test_missing_assignment_raises(
        self,
        service: PeerResponseService,
        uow: FakeUnitOfWork,
    ):
        uow.assignments.get.return_value = None

        with pytest.raises(AssignmentNotFoundError):
            await service.validate("missing", "v1", "s1", "text")
