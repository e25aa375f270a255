"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.errors import store_errors
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile belonging to an auth user."""
        with store_errors("profiles.get_by_user_id"):
            stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        if not model:
            return None
        return Profile(
            id=model.id,
            user_id=model.user_id,
            display_name=model.display_name,
            created_at=model.created_at,
        )
