"""SQLAlchemy implementation of Group repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import case, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from domain.entities.group import (
    Group,
    GroupMember,
    GroupRole,
    GroupStatus,
)
from domain.repositories.group_repository import JoinCodeTaken, MembershipConflict
from infrastructure.database.models import GroupMemberModel, GroupModel


class SQLAlchemyGroupRepository:
    """SQLAlchemy implementation of IGroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Group | None:
        """Get a group by ID."""
        model = await self._first(self._select().where(GroupModel.id == id))
        return self._to_entity(model) if model else None

    async def get_by_join_code(self, join_code: str) -> Group | None:
        """Resolve a join code to its group (unique index lookup)."""
        model = await self._first(
            self._select().where(GroupModel.join_code == join_code)
        )
        return self._to_entity(model) if model else None

    async def join_code_exists(self, join_code: str) -> bool:
        """Check whether any group already uses the join code."""
        stmt = select(exists().where(GroupModel.join_code == join_code))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def get_for_assignment(self, assignment_id: str) -> list[Group]:
        """Get all groups of an assignment, oldest first."""
        stmt = (
            self._select()
            .where(GroupModel.assignment_id == assignment_id)
            .order_by(GroupModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_for_member(
        self, assignment_id: str, user_id: str
    ) -> Group | None:
        """Get the group the user belongs to for an assignment."""
        stmt = (
            self._select()
            .join(GroupMemberModel, GroupMemberModel.group_id == GroupModel.id)
            .where(
                GroupMemberModel.assignment_id == assignment_id,
                GroupMemberModel.user_id == user_id,
            )
        )
        model = await self._first(stmt)
        return self._to_entity(model) if model else None

    async def create(self, group: Group) -> Group:
        """Create a new group with its initial members."""
        model = self._to_model(group)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            if _is_membership_violation(exc):
                raise MembershipConflict(group.assignment_id, group.leader_id)
            if _is_join_code_violation(exc):
                raise JoinCodeTaken(group.join_code)
            raise

        created = await self._first(self._select().where(GroupModel.id == group.id))
        return self._to_entity(created)

    async def append_member(
        self, group_id: UUID, member: GroupMember, expected_size: int
    ) -> Group | None:
        """Add a member with a conditional update on the member count.

        The UPDATE only matches while the group still has ``expected_size``
        members, is below capacity and has not submitted, so concurrent
        joiners cannot both take the last seat.
        """
        new_size = GroupModel.current_size + 1
        stmt = (
            update(GroupModel)
            .where(
                GroupModel.id == group_id,
                GroupModel.current_size == expected_size,
                GroupModel.current_size < GroupModel.max_size,
                GroupModel.status != GroupStatus.SUBMITTED.value,
            )
            .values(
                current_size=new_size,
                status=case(
                    (new_size >= GroupModel.max_size, GroupStatus.READY.value),
                    else_=GroupStatus.FORMING.value,
                ),
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:  # type: ignore[attr-defined]
            return None

        model = await self._first(self._select().where(GroupModel.id == group_id))
        if not model:
            return None

        # A failed flush expires the model, so keep a plain copy
        assignment_id = model.assignment_id
        self._session.add(
            self._member_to_model(
                member,
                group_id=group_id,
                assignment_id=assignment_id,
                position=expected_size,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as exc:
            if _is_membership_violation(exc):
                raise MembershipConflict(assignment_id, member.user_id)
            raise

        updated = await self._first(self._select().where(GroupModel.id == group_id))
        return self._to_entity(updated) if updated else None

    def _select(self) -> Select[tuple[GroupModel]]:
        """Base query loading members and refreshing cached rows."""
        return (
            select(GroupModel)
            .options(selectinload(GroupModel.members))
            .execution_options(populate_existing=True)
        )

    async def _first(self, stmt: Select[tuple[GroupModel]]) -> GroupModel | None:
        result = await self._session.execute(stmt)
        return result.scalars().first()

    def _to_entity(self, model: GroupModel) -> Group:
        """Convert ORM model to domain entity."""
        return Group(
            id=model.id,
            assignment_id=model.assignment_id,
            join_code=model.join_code,
            group_name=model.group_name,
            leader_id=model.leader_id,
            leader_name=model.leader_name,
            members=[self._member_to_entity(m) for m in model.members],
            max_size=model.max_size,
            status=GroupStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Group) -> GroupModel:
        """Convert domain entity to ORM model."""
        return GroupModel(
            id=entity.id,
            assignment_id=entity.assignment_id,
            join_code=entity.join_code,
            group_name=entity.group_name,
            leader_id=entity.leader_id,
            leader_name=entity.leader_name,
            max_size=entity.max_size,
            current_size=entity.current_size,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            members=[
                self._member_to_model(
                    member,
                    group_id=entity.id,
                    assignment_id=entity.assignment_id,
                    position=position,
                )
                for position, member in enumerate(entity.members)
            ],
        )

    def _member_to_entity(self, model: GroupMemberModel) -> GroupMember:
        """Convert member ORM model to domain entity."""
        return GroupMember(
            user_id=model.user_id,
            first_name=model.first_name,
            last_name=model.last_name,
            role=GroupRole(model.role),
            joined_at=model.joined_at,
        )

    def _member_to_model(
        self,
        entity: GroupMember,
        group_id: UUID,
        assignment_id: str,
        position: int,
    ) -> GroupMemberModel:
        """Convert member domain entity to ORM model."""
        return GroupMemberModel(
            group_id=group_id,
            user_id=entity.user_id,
            assignment_id=assignment_id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            role=entity.role.value,
            position=position,
            joined_at=entity.joined_at,
        )


def _is_membership_violation(exc: IntegrityError) -> bool:
    """Whether the integrity error came from a group_members constraint.

    PostgreSQL reports the constraint name (``uq_group_members_...``,
    ``group_members_pkey``); SQLite reports the ``group_members.`` columns.
    """
    return "group_members" in str(exc.orig)


def _is_join_code_violation(exc: IntegrityError) -> bool:
    """Whether the integrity error came from the unique join code index.

    PostgreSQL names ``ix_groups_join_code``; SQLite reports ``groups.join_code``.
    """
    message = str(exc.orig)
    return "ix_groups_join_code" in message or "groups.join_code" in message
