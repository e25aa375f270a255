"""Supabase (PostgREST) implementation of Group repository.

Every call is its own HTTP round trip and commits immediately.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import AsyncClient

from core.exceptions import StoreError
from domain.entities.group import Group, GroupMember
from infrastructure.supabase.errors import store_errors

GROUP_COLUMNS = "id, name, owner_id, join_code, created_at"


class SupabaseGroupRepository:
    """PostgREST implementation of IGroupRepository."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def get_by_join_code(self, join_code: str) -> Group | None:
        with store_errors("groups.get_by_join_code"):
            response = await (
                self._client.table("groups")
                .select(GROUP_COLUMNS)
                .eq("join_code", join_code)
                .limit(1)
                .execute()
            )
        return self._to_entity(response.data[0]) if response.data else None

    async def join_code_exists(self, join_code: str) -> bool:
        with store_errors("groups.join_code_exists"):
            response = await (
                self._client.table("groups")
                .select("id")
                .eq("join_code", join_code)
                .limit(1)
                .execute()
            )
        return bool(response.data)

    async def create(self, group: Group) -> Group:
        """Insert a group; the store assigns ``id`` and ``created_at``."""
        with store_errors("groups.create"):
            response = await (
                self._client.table("groups")
                .insert(
                    {
                        "name": group.name,
                        "owner_id": str(group.owner_id),
                        "join_code": group.join_code,
                    }
                )
                .execute()
            )
        if not response.data:
            # Row-level security filters the returned row without raising.
            raise StoreError("Group insert returned no row", operation="groups.create")
        return self._to_entity(response.data[0])

    async def delete(self, id: UUID) -> bool:
        with store_errors("groups.delete"):
            response = await (
                self._client.table("groups").delete().eq("id", str(id)).execute()
            )
        return len(response.data) > 0

    async def add_member(self, member: GroupMember) -> GroupMember:
        with store_errors("group_members.create"):
            response = await (
                self._client.table("group_members")
                .insert(
                    {
                        "group_id": str(member.group_id),
                        "member_id": str(member.member_id),
                        "role": member.role,
                    }
                )
                .execute()
            )
        return self._member_to_entity(response.data[0]) if response.data else member

    def _to_entity(self, row: dict[str, Any]) -> Group:
        group = Group(
            id=UUID(str(row["id"])),
            name=row["name"],
            owner_id=UUID(str(row["owner_id"])),
            join_code=row["join_code"],
        )
        if row.get("created_at"):
            group.created_at = datetime.fromisoformat(row["created_at"])
        return group

    def _member_to_entity(self, row: dict[str, Any]) -> GroupMember:
        member = GroupMember(
            group_id=UUID(str(row["group_id"])),
            member_id=UUID(str(row["member_id"])),
            role=row["role"],
        )
        if row.get("joined_at"):
            member.joined_at = datetime.fromisoformat(row["joined_at"])
        return member
