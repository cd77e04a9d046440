"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.identity import Identity


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.preferences = AsyncMock()
        self.opportunities = AsyncMock()
        self.volunteer_sessions = AsyncMock()
        self.event_registrations = AsyncMock()
        self.donations = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def identity(user_id: UUID) -> Identity:
    """An identity for user_id with a signup name."""
    return Identity(id=user_id, email="jane@example.com", metadata={"name": "Jane"})
