"""Supabase (PostgREST) implementation of Profile repository."""

from uuid import UUID

from supabase import AsyncClient

from domain.entities.profile import Profile
from infrastructure.supabase.errors import store_errors


class SupabaseProfileRepository:
    """PostgREST implementation of IProfileRepository."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        with store_errors("profiles.get_by_user_id"):
            response = await (
                self._client.table("profiles")
                .select("id, user_id")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(id=UUID(str(row["id"])), user_id=UUID(str(row["user_id"])))
