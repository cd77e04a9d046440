"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

DEFAULT_PROFILE_NAME = "Volunteer"
MAX_PROFILE_NAME_LENGTH = 100

# Fields a user may change through a profile edit.
EDITABLE_PROFILE_FIELDS = frozenset({"name", "avatar_url"})


@dataclass
class Profile:
    """Domain entity for a user profile (one per identity)."""

    id: UUID
    email: str
    name: str = DEFAULT_PROFILE_NAME
    avatar_url: str | None = None
    volunteer_hours: int = 0
    events_attended: int = 0
    donations_made: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
        if min(self.volunteer_hours, self.events_attended, self.donations_made) < 0:
            raise ValueError("Profile counters cannot be negative")

