"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    ASSIGNMENT_NOT_FOUND = "ASSIGNMENT_NOT_FOUND"
    INVALID_JOIN_CODE = "INVALID_JOIN_CODE"
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"

    # Validation / invalid operation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_A_GROUP_ASSIGNMENT = "NOT_A_GROUP_ASSIGNMENT"

    # Conflict errors (409)
    ALREADY_IN_GROUP = "ALREADY_IN_GROUP"
    ALREADY_IN_THIS_GROUP = "ALREADY_IN_THIS_GROUP"
    ALREADY_IN_ANOTHER_GROUP = "ALREADY_IN_ANOTHER_GROUP"
    GROUP_FULL = "GROUP_FULL"
    GROUP_ALREADY_SUBMITTED = "GROUP_ALREADY_SUBMITTED"
    GROUP_UPDATE_CONFLICT = "GROUP_UPDATE_CONFLICT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    JOIN_CODE_EXHAUSTED = "JOIN_CODE_EXHAUSTED"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AssignmentNotFoundError(AppException):
    """Assignment not found."""

    def __init__(self, assignment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ASSIGNMENT_NOT_FOUND,
            message=f"Assignment not found: {assignment_id}",
            status_code=404,
            details={"assignment_id": assignment_id},
        )


class InvalidJoinCodeError(AppException):
    """Join code does not resolve to a group."""

    def __init__(self, join_code: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_JOIN_CODE,
            message="Invalid join code",
            status_code=404,
            details={"join_code": join_code},
        )


class GroupNotFoundError(AppException):
    """User has no group for the assignment."""

    def __init__(self, assignment_id: str, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_NOT_FOUND,
            message="You are not in a group for this assignment",
            status_code=404,
            details={"assignment_id": assignment_id, "user_id": user_id},
        )


class NotAGroupAssignmentError(AppException):
    """Group operation attempted on an individual assignment."""

    def __init__(self, assignment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_GROUP_ASSIGNMENT,
            message="This is not a group assignment",
            status_code=400,
            details={"assignment_id": assignment_id},
        )


class AlreadyInGroupError(AppException):
    """User already belongs to a group for the assignment."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_IN_GROUP,
            message="You are already in a group for this assignment",
            status_code=409,
            details={"user_id": user_id},
        )


class AlreadyInThisGroupError(AppException):
    """User is already a member of the group being joined."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_IN_THIS_GROUP,
            message="You are already in this group",
            status_code=409,
            details={"user_id": user_id},
        )


class AlreadyInAnotherGroupError(AppException):
    """User belongs to a different group for the same assignment."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_IN_ANOTHER_GROUP,
            message="You are already in another group for this assignment",
            status_code=409,
            details={"user_id": user_id},
        )


class GroupFullError(AppException):
    """Group has reached its capacity."""

    def __init__(self, max_size: int) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_FULL,
            message="This group is full",
            status_code=409,
            details={"max_size": max_size},
        )


class GroupAlreadySubmittedError(AppException):
    """Group has submitted and is closed to new members."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_ALREADY_SUBMITTED,
            message="This group has already submitted and cannot accept new members",
            status_code=409,
        )


class GroupUpdateConflictError(AppException):
    """Concurrent updates kept the group from being modified."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_UPDATE_CONFLICT,
            message="The group was modified concurrently, please try again",
            status_code=409,
            details={"group_id": group_id},
        )


class JoinCodeExhaustedError(AppException):
    """No unused join code found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            error_code=ErrorCode.JOIN_CODE_EXHAUSTED,
            message="Could not generate a unique join code",
            status_code=500,
            details={"attempts": attempts},
        )
