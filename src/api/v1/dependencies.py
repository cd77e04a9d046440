"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends

from api.dependencies.auth import CurrentIdentity
from api.v1.results import unwrap
from core.exceptions import ProfileNotFoundError
from domain.entities.profile import Profile
from domain.services.activity_service import ActivityService
from domain.services.preferences_service import PreferencesService
from domain.services.profile_service import ProfileService
from domain.services.recommendation_service import RecommendationService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_preferences_service() -> PreferencesService:
    """Get Preferences service instance."""
    return PreferencesService(get_uow_factory())


@lru_cache
def get_recommendation_service() -> RecommendationService:
    """Get Recommendation service instance."""
    return RecommendationService(
        get_uow_factory(),
        preferences_service=get_preferences_service(),
    )


@lru_cache
def get_activity_service() -> ActivityService:
    """Get Activity service instance."""
    return ActivityService(get_uow_factory())


async def get_current_profile(
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """Resolve the caller's profile, creating it on first contact."""
    profile = unwrap(await service.ensure_profile(identity))
    if profile is None:
        raise ProfileNotFoundError(str(identity.id))
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
