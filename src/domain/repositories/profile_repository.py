"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Read-only repository interface for Profile entities."""

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to an auth user."""
        ...
