"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.activity_repository import (
    IDonationRepository,
    IEventRegistrationRepository,
    IVolunteerSessionRepository,
)
from domain.repositories.opportunity_repository import IOpportunityRepository
from domain.repositories.preferences_repository import IPreferencesRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    preferences: IPreferencesRepository
    opportunities: IOpportunityRepository
    volunteer_sessions: IVolunteerSessionRepository
    event_registrations: IEventRegistrationRepository
    donations: IDonationRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
