"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self, transactional: bool = True) -> None:
        self.profiles = AsyncMock()
        self.groups = AsyncMock()
        self.groups.join_code_exists.return_value = False
        self.transactional = transactional
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type and self.transactional:
            await self.rollback()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh transactional FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random auth user ID."""
    return uuid4()


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    """The profile belonging to ``user_id``."""
    return Profile(user_id=user_id)
