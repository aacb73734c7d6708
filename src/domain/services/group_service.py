"""Group service layer with business logic."""

from typing import Callable, List, Optional

import structlog

from core.exceptions import (
    AlreadyInAnotherGroupError,
    AlreadyInGroupError,
    AlreadyInThisGroupError,
    AssignmentNotFoundError,
    GroupAlreadySubmittedError,
    GroupFullError,
    GroupNotFoundError,
    GroupUpdateConflictError,
    InvalidJoinCodeError,
    JoinCodeExhaustedError,
    NotAGroupAssignmentError,
)
from domain.entities.group import (
    Group,
    GroupMember,
    GroupRole,
    GroupStatus,
    default_group_name,
)
from domain.repositories.group_repository import JoinCodeTaken, MembershipConflict
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.join_code import (
    JOIN_CODE_MAX_ATTEMPTS,
    generate_join_code,
    normalize_join_code,
)

logger = structlog.get_logger()

# Times a join re-reads the group after losing a concurrent update
JOIN_MAX_ATTEMPTS = 3


class GroupService:
    """Service layer for assignment group formation."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        code_generator: Callable[[], str] = generate_join_code,
    ) -> None:
        self._uow_factory = uow_factory
        self._generate_code = code_generator

    async def create(
        self,
        assignment_id: str,
        user_id: str,
        first_name: str,
        last_name: str,
        group_name: Optional[str] = None,
    ) -> Group:
        """Create a group for an assignment with the caller as leader.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
            NotAGroupAssignmentError: If the assignment is individual.
            AlreadyInGroupError: If the user already has a group for it.
            JoinCodeExhaustedError: If no unused join code could be found.
        """
        async with self._uow_factory() as uow:
            assignment = await uow.assignments.get(assignment_id)
            if not assignment:
                raise AssignmentNotFoundError(assignment_id)

            if not assignment.group_assignment:
                raise NotAGroupAssignmentError(assignment_id)

            existing = await uow.groups.get_for_member(assignment_id, user_id)
            if existing:
                raise AlreadyInGroupError(user_id)

            # Draws that lose to a concurrent create count against the budget
            for attempt in range(1, JOIN_CODE_MAX_ATTEMPTS + 1):
                join_code = self._generate_code()
                if await uow.groups.join_code_exists(join_code):
                    logger.warning("join_code_collision", attempt=attempt)
                    continue

                leader = GroupMember(
                    user_id=user_id,
                    first_name=first_name,
                    last_name=last_name,
                    role=GroupRole.LEADER,
                )
                name = (group_name or "").strip() or default_group_name(join_code)
                group = Group(
                    assignment_id=assignment_id,
                    join_code=join_code,
                    group_name=name,
                    leader_id=user_id,
                    leader_name=leader.display_name,
                    members=[leader],
                    max_size=assignment.effective_max_group_size,
                    status=GroupStatus.FORMING,
                )

                try:
                    created = await uow.groups.create(group)
                except MembershipConflict:
                    raise AlreadyInGroupError(user_id)
                except JoinCodeTaken:
                    await uow.rollback()
                    logger.warning(
                        "join_code_collision", attempt=attempt, concurrent=True
                    )
                    continue
                await uow.commit()

                logger.info(
                    "group_created",
                    group_id=str(created.id),
                    assignment_id=assignment_id,
                    join_code=join_code,
                    max_size=created.max_size,
                )
                return created

            raise JoinCodeExhaustedError(JOIN_CODE_MAX_ATTEMPTS)

    async def join(
        self,
        join_code: str,
        user_id: str,
        first_name: str,
        last_name: str,
    ) -> Group:
        """Join the group identified by a join code.

        The member is appended with a conditional update keyed on the member
        count that was read, so two students racing for the last seat cannot
        both get in. The loser re-reads the group and sees it full.

        Raises:
            InvalidJoinCodeError: If the code matches no group.
            AlreadyInThisGroupError: If the user is already a member.
            GroupFullError: If the group is at capacity.
            GroupAlreadySubmittedError: If the group has submitted.
            AlreadyInAnotherGroupError: If the user has another group for
                the same assignment.
            GroupUpdateConflictError: If concurrent joins kept winning.
        """
        code = normalize_join_code(join_code)

        async with self._uow_factory() as uow:
            group: Group | None = None
            for attempt in range(1, JOIN_MAX_ATTEMPTS + 1):
                group = await uow.groups.get_by_join_code(code)
                if not group:
                    raise InvalidJoinCodeError(code)

                await self._check_can_join(uow, group, user_id)

                member = GroupMember(
                    user_id=user_id,
                    first_name=first_name,
                    last_name=last_name,
                    role=GroupRole.MEMBER,
                )
                try:
                    updated = await uow.groups.append_member(
                        group.id, member, expected_size=group.current_size
                    )
                except MembershipConflict:
                    raise AlreadyInAnotherGroupError(user_id)
                if updated:
                    await uow.commit()
                    logger.info(
                        "group_joined",
                        group_id=str(updated.id),
                        assignment_id=updated.assignment_id,
                        current_size=updated.current_size,
                        status=updated.status.value,
                    )
                    return updated

                logger.info(
                    "group_join_race_lost",
                    group_id=str(group.id),
                    attempt=attempt,
                )

            raise GroupUpdateConflictError(str(group.id) if group else code)

    async def get_for_assignment(self, assignment_id: str) -> List[Group]:
        """Get all groups of an assignment."""
        async with self._uow_factory() as uow:
            assignment = await uow.assignments.get(assignment_id)
            if not assignment:
                raise AssignmentNotFoundError(assignment_id)

            return await uow.groups.get_for_assignment(assignment_id)

    async def get_for_member(self, assignment_id: str, user_id: str) -> Group:
        """Get the group a user belongs to for an assignment."""
        async with self._uow_factory() as uow:
            group = await uow.groups.get_for_member(assignment_id, user_id)
            if not group:
                raise GroupNotFoundError(assignment_id, user_id)

            return group

    # --- Internal helpers ---

    async def _check_can_join(
        self, uow: IUnitOfWork, group: Group, user_id: str
    ) -> None:
        """Apply the join rules in order; the first failure wins."""
        if group.has_member(user_id):
            raise AlreadyInThisGroupError(user_id)

        if group.is_full:
            raise GroupFullError(group.max_size)

        if group.is_submitted:
            raise GroupAlreadySubmittedError()

        other = await uow.groups.get_for_member(group.assignment_id, user_id)
        if other and other.id != group.id:
            raise AlreadyInAnotherGroupError(user_id)
