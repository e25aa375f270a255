"""Group service layer with business logic."""

import random
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    AuthenticationError,
    GroupNotFoundError,
    ProfileNotFoundError,
    StoreError,
)
from domain.entities.group import CREATOR_ROLE, Group, GroupMember
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.join_code import (
    DEFAULT_MAX_ATTEMPTS,
    JOIN_CODE_LENGTH,
    reserve_unique_code,
)

logger = structlog.get_logger()


class GroupService:
    """Service layer for creating and looking up join-code groups."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        rng: Optional[random.Random] = None,
        join_code_length: int = JOIN_CODE_LENGTH,
        max_code_attempts: int = DEFAULT_MAX_ATTEMPTS,
        creator_role: str = CREATOR_ROLE,
    ) -> None:
        self._uow_factory = uow_factory
        self._rng = rng
        self._join_code_length = join_code_length
        self._max_code_attempts = max_code_attempts
        self._creator_role = creator_role

    async def create(self, user_id: Optional[UUID], name: str) -> Group:
        """Create a group owned by the user's profile and enroll them in it.

        Steps run strictly in order: resolve the profile, reserve a join
        code, insert the group, insert the creator's membership. Callers are
        expected to have rejected blank names already.

        On a transactional store the group and membership inserts commit
        together. On a store without transactions a failed membership insert
        is compensated by deleting the group; if that delete fails too the
        group is left without members and ``orphan_group_left`` is logged.

        Raises:
            AuthenticationError: If there is no authenticated user.
            ProfileNotFoundError: If the user has no profile.
            JoinCodeExhaustedError: If no free join code was found.
            StoreError: If any store lookup or insert fails.
        """
        if user_id is None:
            raise AuthenticationError("No user found")

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))

            join_code = await reserve_unique_code(
                uow.groups.join_code_exists,
                rng=self._rng,
                length=self._join_code_length,
                max_attempts=self._max_code_attempts,
            )

            created = await uow.groups.create(
                Group(name=name, owner_id=profile.id, join_code=join_code)
            )

            try:
                await uow.groups.add_member(
                    GroupMember(
                        group_id=created.id,
                        member_id=profile.id,
                        role=self._creator_role,
                    )
                )
            except StoreError:
                if not uow.transactional:
                    await self._discard_group(uow, created)
                raise

            await uow.commit()

        logger.info(
            "group_created",
            group_id=str(created.id),
            owner_id=str(profile.id),
            join_code=created.join_code,
        )
        return created

    async def get_by_join_code(self, join_code: str) -> Group:
        """Look up a group by its join code (case-insensitive)."""
        normalized = join_code.strip().upper()
        async with self._uow_factory() as uow:
            group = await uow.groups.get_by_join_code(normalized)
            if not group:
                raise GroupNotFoundError(normalized)
            return group

    # --- Internal helpers ---

    async def _discard_group(self, uow: IUnitOfWork, group: Group) -> None:
        """Delete a group whose creator membership could not be written."""
        try:
            await uow.groups.delete(group.id)
        except StoreError as exc:
            logger.error(
                "orphan_group_left",
                group_id=str(group.id),
                error=exc.message,
            )
            return

        logger.warning("group_compensated", group_id=str(group.id))
