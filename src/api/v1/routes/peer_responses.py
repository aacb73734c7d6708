"""Peer response API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_peer_response_service
from api.v1.schemas.peer_response import (
    ValidateResponseRequest,
    ValidateResponseResponse,
    ValidationResultResponse,
)
from core.rate_limit import READ_LIMIT, limiter
from domain.services.peer_response_service import PeerResponseService

router = APIRouter(prefix="/peer-responses", tags=["peer-responses"])


@router.post(
    "/validate",
    response_model=ValidateResponseResponse,
    summary="Validate a draft peer response",
    responses={
        200: {"description": "Validation outcome (errors and warnings)"},
        404: {"description": "Assignment not found (when no settings given)"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def validate_response(
    request: Request,
    body: ValidateResponseRequest,
    service: PeerResponseService = Depends(get_peer_response_service),
) -> ValidateResponseResponse:
    """Check a response against the assignment's peer response rules.

    Nothing is stored. Every violated constraint is reported so the student
    can fix them in one pass.
    """
    assignment = (
        body.assignment.to_entity(body.assignment_id) if body.assignment else None
    )
    result = await service.validate(
        assignment_id=body.assignment_id,
        video_id=body.video_id,
        student_id=body.student_id,
        content=body.content,
        assignment=assignment,
    )
    return ValidateResponseResponse(
        validation=ValidationResultResponse(
            can_submit=result.can_submit,
            errors=result.errors,
            warnings=result.warnings,
        )
    )
