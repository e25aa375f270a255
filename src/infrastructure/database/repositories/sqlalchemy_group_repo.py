"""SQLAlchemy implementation of Group repository."""

from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.group import Group, GroupMember
from infrastructure.database.errors import store_errors
from infrastructure.database.models import GroupMemberModel, GroupModel


class SQLAlchemyGroupRepository:
    """SQLAlchemy implementation of IGroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_join_code(self, join_code: str) -> Group | None:
        """Get the group holding a join code."""
        with store_errors("groups.get_by_join_code"):
            stmt = select(GroupModel).where(GroupModel.join_code == join_code)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def join_code_exists(self, join_code: str) -> bool:
        """Check whether any group already uses a join code."""
        with store_errors("groups.join_code_exists"):
            stmt = select(exists().where(GroupModel.join_code == join_code))
            result = await self._session.execute(stmt)
            return bool(result.scalar())

    async def create(self, group: Group) -> Group:
        """Insert a new group (flushed, committed by the unit of work)."""
        model = self._to_model(group)
        with store_errors("groups.create"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a group (cascade deletes members)."""
        with store_errors("groups.delete"):
            model = await self._session.get(GroupModel, id)
            if not model:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def add_member(self, member: GroupMember) -> GroupMember:
        """Insert a membership row."""
        model = self._member_to_model(member)
        with store_errors("group_members.create"):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._member_to_entity(model)

    def _to_entity(self, model: GroupModel) -> Group:
        """Convert ORM model to domain entity."""
        return Group(
            id=model.id,
            name=model.name,
            owner_id=model.owner_id,
            join_code=model.join_code,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Group) -> GroupModel:
        """Convert domain entity to ORM model."""
        return GroupModel(
            id=entity.id,
            name=entity.name,
            owner_id=entity.owner_id,
            join_code=entity.join_code,
            created_at=entity.created_at,
        )

    def _member_to_entity(self, model: GroupMemberModel) -> GroupMember:
        """Convert member ORM model to domain entity."""
        return GroupMember(
            group_id=model.group_id,
            member_id=model.member_id,
            role=model.role,
            joined_at=model.joined_at,
        )

    def _member_to_model(self, entity: GroupMember) -> GroupMemberModel:
        """Convert member domain entity to ORM model."""
        return GroupMemberModel(
            group_id=entity.group_id,
            member_id=entity.member_id,
            role=entity.role,
            joined_at=entity.joined_at,
        )
