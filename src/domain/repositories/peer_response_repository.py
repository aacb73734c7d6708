"""Peer response repository protocol."""

from typing import Protocol


class IPeerResponseRepository(Protocol):
    """Read-only counters over stored peer responses."""

    async def count_for_student(self, assignment_id: str, student_id: str) -> int:
        """Count responses a student has written for an assignment."""
        ...

    async def count_for_video(self, video_id: str) -> int:
        """Count responses written about a video."""
        ...
