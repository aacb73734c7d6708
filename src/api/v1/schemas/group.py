"""Pydantic schemas for Group API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from api.v1.schemas.common import CamelModel


class CreateGroupRequest(CamelModel):
    """Schema for creating a group."""

    assignment_id: str = Field(..., min_length=1, max_length=64)
    user_id: str = Field(..., min_length=1, max_length=64)
    group_name: str | None = Field(None, max_length=100)
    user_first_name: str = Field("", max_length=100)
    user_last_name: str = Field("", max_length=100)


class JoinGroupRequest(CamelModel):
    """Schema for joining a group with a join code."""

    join_code: str = Field(..., min_length=1, max_length=12)
    user_id: str = Field(..., min_length=1, max_length=64)
    user_first_name: str = Field("", max_length=100)
    user_last_name: str = Field("", max_length=100)


class GroupMemberResponse(CamelModel):
    """Schema for a group membership record."""

    user_id: str
    first_name: str
    last_name: str
    joined_at: datetime
    role: str


class CreateGroupResponse(CamelModel):
    """Schema returned after creating a group."""

    group_id: UUID
    join_code: str
    group_name: str
    current_size: int
    max_size: int
    members: list[GroupMemberResponse]


class JoinGroupResponse(CamelModel):
    """Schema returned after joining a group."""

    group_id: UUID
    group_name: str
    join_code: str
    current_size: int
    max_size: int
    members: list[GroupMemberResponse]
    status: str


class GroupResponse(CamelModel):
    """Schema for a full Group record."""

    group_id: UUID
    assignment_id: str
    group_name: str
    join_code: str
    leader_id: str
    leader_name: str
    member_ids: list[str]
    members: list[GroupMemberResponse]
    current_size: int
    max_size: int
    status: str
    created_at: datetime
    updated_at: datetime


class GroupListResponse(BaseModel):
    """Schema for list of Groups response."""

    data: list[GroupResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
