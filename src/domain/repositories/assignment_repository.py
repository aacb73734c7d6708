"""Assignment repository protocol."""

from typing import Protocol

from domain.entities.assignment import Assignment


class IAssignmentRepository(Protocol):
    """Read-only access to assignment configuration."""

    async def get(self, id: str) -> Assignment | None:
        """Get an assignment by ID."""
        ...
