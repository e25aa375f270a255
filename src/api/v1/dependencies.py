"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.group_service import GroupService


def get_uow_factory() -> Callable[[], IUnitOfWork]:
    """Factory for creating Unit of Work instances for the configured store."""
    if settings.store_backend == "supabase":
        from infrastructure.supabase.client import get_supabase
        from infrastructure.supabase.supabase_uow import SupabaseUnitOfWork

        def supabase_factory() -> IUnitOfWork:
            return SupabaseUnitOfWork(get_supabase)

        return supabase_factory

    from infrastructure.database.session import async_session_factory
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

    def factory() -> IUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_group_service() -> GroupService:
    """Get Group service instance."""
    return GroupService(
        get_uow_factory(),
        join_code_length=settings.join_code_length,
        max_code_attempts=settings.join_code_max_attempts,
        creator_role=settings.creator_role,
    )
