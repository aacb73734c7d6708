"""Group API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.v1.dependencies import get_group_service
from api.v1.schemas.group import (
    CreateGroupRequest,
    CreateGroupResponse,
    GroupListResponse,
    GroupMemberResponse,
    GroupResponse,
    JoinGroupRequest,
    JoinGroupResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.group import Group, GroupMember
from domain.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])

assignment_groups_router = APIRouter(
    prefix="/assignments/{assignment_id}/groups",
    tags=["groups"],
)


@router.post(
    "",
    response_model=CreateGroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={
        201: {"description": "Group created with the caller as leader"},
        400: {"description": "Missing input or not a group assignment"},
        404: {"description": "Assignment not found"},
        409: {"description": "Already in a group for this assignment"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_group(
    request: Request,
    body: CreateGroupRequest,
    service: GroupService = Depends(get_group_service),
) -> CreateGroupResponse:
    """Create a group for a group assignment and return its join code."""
    group = await service.create(
        assignment_id=body.assignment_id,
        user_id=body.user_id,
        first_name=body.user_first_name,
        last_name=body.user_last_name,
        group_name=body.group_name,
    )
    return CreateGroupResponse(
        group_id=group.id,
        join_code=group.join_code,
        group_name=group.group_name,
        current_size=group.current_size,
        max_size=group.max_size,
        members=[_build_member_response(m) for m in group.members],
    )


@router.post(
    "/join",
    response_model=JoinGroupResponse,
    summary="Join a group",
    responses={
        200: {"description": "Joined the group"},
        404: {"description": "Invalid join code"},
        409: {"description": "Already a member, group full or submitted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def join_group(
    request: Request,
    body: JoinGroupRequest,
    service: GroupService = Depends(get_group_service),
) -> JoinGroupResponse:
    """Join an existing group using its join code."""
    group = await service.join(
        join_code=body.join_code,
        user_id=body.user_id,
        first_name=body.user_first_name,
        last_name=body.user_last_name,
    )
    return JoinGroupResponse(
        group_id=group.id,
        group_name=group.group_name,
        join_code=group.join_code,
        current_size=group.current_size,
        max_size=group.max_size,
        members=[_build_member_response(m) for m in group.members],
        status=group.status.value,
    )


@assignment_groups_router.get(
    "",
    response_model=GroupListResponse,
    summary="List assignment groups",
    responses={
        200: {"description": "Groups formed for the assignment"},
        404: {"description": "Assignment not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_groups(
    request: Request,
    assignment_id: str,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get all groups formed for an assignment."""
    groups = await service.get_for_assignment(assignment_id)
    data = [_build_group_response(g) for g in groups]
    return GroupListResponse(data=data, meta={"total": len(data)})


@assignment_groups_router.get(
    "/mine",
    response_model=GroupResponse,
    summary="Get the caller's group",
    responses={
        200: {"description": "The user's group for the assignment"},
        404: {"description": "User is not in a group for this assignment"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_group(
    request: Request,
    assignment_id: str,
    user_id: str = Query(..., alias="userId", min_length=1),
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Get the group a user belongs to for an assignment."""
    group = await service.get_for_member(assignment_id, user_id)
    return _build_group_response(group)


def _build_member_response(member: GroupMember) -> GroupMemberResponse:
    """Convert domain entity to response schema."""
    return GroupMemberResponse(
        user_id=member.user_id,
        first_name=member.first_name,
        last_name=member.last_name,
        joined_at=member.joined_at,
        role=member.role.value,
    )


def _build_group_response(group: Group) -> GroupResponse:
    return GroupResponse(
        group_id=group.id,
        assignment_id=group.assignment_id,
        group_name=group.group_name,
        join_code=group.join_code,
        leader_id=group.leader_id,
        leader_name=group.leader_name,
        member_ids=group.member_ids,
        members=[_build_member_response(m) for m in group.members],
        current_size=group.current_size,
        max_size=group.max_size,
        status=group.status.value,
        created_at=group.created_at,
        updated_at=group.updated_at,
    )
