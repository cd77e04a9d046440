"""Profile repository protocol."""

from typing import Optional, Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, user_id: UUID) -> Optional[Profile]:
        """Get a profile by identity ID."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile. Raises IntegrityError if the ID already exists."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist changes to an existing profile."""
        ...
