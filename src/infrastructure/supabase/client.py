"""Shared Supabase client."""

from supabase import AsyncClient, acreate_client

from core.config import settings


class SupabaseClient:
    """Lazily created process-wide async Supabase client.

    Authenticates with the service role key: the client is shared across
    requests and carries no user session, so row-level security would hide
    every row from it otherwise.
    """

    _client: AsyncClient | None = None

    @classmethod
    async def get_client(cls) -> AsyncClient:
        if cls._client is None:
            cls._client = await acreate_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._client

    @classmethod
    def reset_client(cls) -> None:
        cls._client = None


async def get_supabase() -> AsyncClient:
    return await SupabaseClient.get_client()
