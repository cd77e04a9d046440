"""Volunteer preferences repository protocol."""

from typing import Optional, Protocol
from uuid import UUID

from domain.entities.preferences import NotificationSettings, VolunteerPreferences


class IPreferencesRepository(Protocol):
    """Repository interface for VolunteerPreferences entities."""

    async def get_for_user(self, user_id: UUID) -> Optional[VolunteerPreferences]:
        """Get the preference row for a user, if one exists."""
        ...

    async def upsert(self, preferences: VolunteerPreferences) -> None:
        """Atomically insert or replace the row keyed on user_id."""
        ...

    async def update_notification_settings(
        self, user_id: UUID, settings: NotificationSettings
    ) -> Optional[VolunteerPreferences]:
        """Replace only the notification settings. Returns None if no row exists."""
        ...
