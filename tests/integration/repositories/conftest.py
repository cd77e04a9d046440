"""Fixtures for repository integration tests."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
async def profile_id(uow_factory: Callable[[], SQLAlchemyUnitOfWork]) -> UUID:
    """A stored profile that activity and preference rows can point at."""
    user_id = uuid4()
    async with uow_factory() as uow:
        await uow.profiles.create(
            Profile(id=user_id, email="repo@example.com", name="Repo", created_at=datetime(2026, 1, 1))
        )
        await uow.commit()
    return user_id
