"""Activity source repository protocols."""

from typing import List, Optional, Protocol
from uuid import UUID

from domain.entities.activity import (
    AttendanceStatus,
    Donation,
    EventRegistration,
    VolunteerSession,
)


class IVolunteerSessionRepository(Protocol):
    """Repository interface for VolunteerSession records."""

    async def create(self, session: VolunteerSession) -> VolunteerSession:
        """Record a volunteer session."""
        ...

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[VolunteerSession]:
        """Sessions for a user, newest session_date first."""
        ...

    async def total_completed_hours(self, user_id: UUID) -> float:
        """Sum of hours over the user's completed sessions."""
        ...


class IEventRegistrationRepository(Protocol):
    """Repository interface for EventRegistration records."""

    async def create(self, registration: EventRegistration) -> EventRegistration:
        """Record an event registration."""
        ...

    async def get(self, registration_id: UUID) -> Optional[EventRegistration]:
        """Get a registration by ID."""
        ...

    async def update_attendance(
        self, registration_id: UUID, status: AttendanceStatus
    ) -> Optional[EventRegistration]:
        """Change attendance status. Returns None if the registration does not exist."""
        ...

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[EventRegistration]:
        """Registrations for a user, newest registration_date first."""
        ...

    async def count_attended(self, user_id: UUID) -> int:
        """Number of events the user attended."""
        ...


class IDonationRepository(Protocol):
    """Repository interface for Donation records."""

    async def create(self, donation: Donation) -> Donation:
        """Record a donation."""
        ...

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[Donation]:
        """Donations for a user, newest donation_date first."""
        ...

    async def count_completed(self, user_id: UUID) -> int:
        """Number of completed donations."""
        ...
