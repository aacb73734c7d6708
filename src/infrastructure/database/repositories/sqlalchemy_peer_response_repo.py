"""SQLAlchemy implementation of PeerResponse repository."""

import structlog
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from infrastructure.database.models import PeerResponseModel

logger = structlog.get_logger()


class SQLAlchemyPeerResponseRepository:
    """SQLAlchemy implementation of IPeerResponseRepository.

    Peer responses are written elsewhere; when their table has not been
    provisioned every count is zero rather than an error.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._table_exists: bool | None = None

    async def count_for_student(self, assignment_id: str, student_id: str) -> int:
        """Count responses a student has written for an assignment."""
        stmt = (
            select(func.count())
            .select_from(PeerResponseModel)
            .where(
                PeerResponseModel.assignment_id == assignment_id,
                PeerResponseModel.student_id == student_id,
            )
        )
        return await self._count(stmt)

    async def count_for_video(self, video_id: str) -> int:
        """Count responses written about a video."""
        stmt = (
            select(func.count())
            .select_from(PeerResponseModel)
            .where(PeerResponseModel.video_id == video_id)
        )
        return await self._count(stmt)

    async def _count(self, stmt: Select[tuple[int]]) -> int:
        if not await self._has_table():
            return 0
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _has_table(self) -> bool:
        if self._table_exists is None:
            conn = await self._session.connection()
            table_name = PeerResponseModel.__tablename__
            self._table_exists = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table(table_name)
            )
            if not self._table_exists:
                logger.warning("peer_response_table_missing", table=table_name)
        return self._table_exists
