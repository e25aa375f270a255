"""Unit of Work over the Supabase REST API."""

from typing import Any, Awaitable, Callable, Optional

from supabase import AsyncClient

from infrastructure.supabase.repositories.supabase_group_repo import SupabaseGroupRepository
from infrastructure.supabase.repositories.supabase_profile_repo import SupabaseProfileRepository


class SupabaseUnitOfWork:
    """Unit of Work for PostgREST, which has no multi-statement transactions.

    Each repository call commits on its own; ``commit`` and ``rollback`` are
    no-ops and ``transactional`` tells services to compensate instead.
    """

    transactional = False

    def __init__(self, client_factory: Callable[[], Awaitable[AsyncClient]]) -> None:
        self._client_factory = client_factory
        self._client: Optional[AsyncClient] = None

    @property
    def profiles(self) -> SupabaseProfileRepository:
        """Get profile repository."""
        if not self._client:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SupabaseProfileRepository(self._client)

    @property
    def groups(self) -> SupabaseGroupRepository:
        """Get group repository."""
        if not self._client:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SupabaseGroupRepository(self._client)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    async def __aenter__(self) -> "SupabaseUnitOfWork":
        self._client = await self._client_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        self._client = None
