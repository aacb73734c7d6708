"""SQLAlchemy implementation of Assignment repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.assignment import Assignment
from infrastructure.database.models import AssignmentModel


class SQLAlchemyAssignmentRepository:
    """SQLAlchemy implementation of IAssignmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> Assignment | None:
        """Get an assignment by ID."""
        stmt = select(AssignmentModel).where(AssignmentModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: AssignmentModel) -> Assignment:
        """Convert ORM model to domain entity."""
        return Assignment(
            id=model.id,
            course_id=model.course_id,
            title=model.title,
            group_assignment=model.group_assignment,
            max_group_size=model.max_group_size,
            enable_peer_responses=model.enable_peer_responses,
            response_due_date=model.response_due_date,
            response_word_limit=model.response_word_limit,
            response_character_limit=model.response_character_limit,
            min_responses_required=model.min_responses_required,
            max_responses_per_video=model.max_responses_per_video,
        )
