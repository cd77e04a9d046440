"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_activity_repo import (
    SQLAlchemyDonationRepository,
    SQLAlchemyEventRegistrationRepository,
    SQLAlchemyVolunteerSessionRepository,
)
from infrastructure.database.repositories.sqlalchemy_opportunity_repo import (
    SQLAlchemyOpportunityRepository,
)
from infrastructure.database.repositories.sqlalchemy_preferences_repo import (
    SQLAlchemyPreferencesRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    One session per unit of work. Concurrent operations must each open
    their own unit of work; an AsyncSession is not safe to share.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def preferences(self) -> SQLAlchemyPreferencesRepository:
        """Get volunteer preferences repository."""
        return SQLAlchemyPreferencesRepository(self._require_session())

    @property
    def opportunities(self) -> SQLAlchemyOpportunityRepository:
        """Get opportunity repository."""
        return SQLAlchemyOpportunityRepository(self._require_session())

    @property
    def volunteer_sessions(self) -> SQLAlchemyVolunteerSessionRepository:
        """Get volunteer session repository."""
        return SQLAlchemyVolunteerSessionRepository(self._require_session())

    @property
    def event_registrations(self) -> SQLAlchemyEventRegistrationRepository:
        """Get event registration repository."""
        return SQLAlchemyEventRegistrationRepository(self._require_session())

    @property
    def donations(self) -> SQLAlchemyDonationRepository:
        """Get donation repository."""
        return SQLAlchemyDonationRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
