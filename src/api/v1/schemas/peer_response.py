"""Pydantic schemas for Peer Response API."""

from datetime import datetime

from pydantic import Field

from api.v1.schemas.common import CamelModel
from domain.entities.assignment import Assignment


class AssignmentSettings(CamelModel):
    """Assignment configuration supplied by the caller.

    ``response_word_limit`` is enforced as a minimum word count.
    """

    group_assignment: bool = False
    max_group_size: int | None = Field(None, ge=1)
    enable_peer_responses: bool = False
    response_due_date: datetime | None = None
    response_word_limit: int | None = Field(None, ge=0)
    response_character_limit: int | None = Field(None, ge=0)
    min_responses_required: int | None = Field(None, ge=0)
    max_responses_per_video: int | None = Field(None, ge=0)

    def to_entity(self, assignment_id: str) -> Assignment:
        return Assignment(
            id=assignment_id,
            group_assignment=self.group_assignment,
            max_group_size=self.max_group_size,
            enable_peer_responses=self.enable_peer_responses,
            response_due_date=self.response_due_date,
            response_word_limit=self.response_word_limit,
            response_character_limit=self.response_character_limit,
            min_responses_required=self.min_responses_required,
            max_responses_per_video=self.max_responses_per_video,
        )


class ValidateResponseRequest(CamelModel):
    """Schema for validating a draft peer response."""

    assignment_id: str = Field(..., min_length=1, max_length=64)
    video_id: str = Field(..., min_length=1, max_length=64)
    student_id: str = Field(..., min_length=1, max_length=64)
    content: str = ""
    assignment: AssignmentSettings | None = None


class ValidationResultResponse(CamelModel):
    """Schema for a validation outcome."""

    can_submit: bool
    errors: list[str]
    warnings: list[str]


class ValidateResponseResponse(CamelModel):
    """Schema wrapping the validation outcome."""

    validation: ValidationResultResponse
