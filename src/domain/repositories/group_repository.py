"""Group repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.group import Group, GroupMember


class IGroupRepository(Protocol):
    """Repository interface for Group entities."""

    async def get_by_join_code(self, join_code: str) -> Group | None:
        """Get the group holding a join code."""
        ...

    async def join_code_exists(self, join_code: str) -> bool:
        """Check whether any group already uses a join code."""
        ...

    async def create(self, group: Group) -> Group:
        """Insert a new group."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a group."""
        ...

    async def add_member(self, member: GroupMember) -> GroupMember:
        """Insert a membership row."""
        ...
