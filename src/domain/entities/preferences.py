"""Volunteer preference domain entities."""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

FLEXIBLE_SCHEDULE = "Flexible Schedule"


def _unique(values: Iterable[str]) -> list[str]:
    """De-duplicate while keeping the caller's order."""
    return list(dict.fromkeys(v for v in values if v))


@dataclass
class NotificationSettings:
    """Per-user notification switches. Every flag defaults to enabled."""

    email: bool = True
    push: bool = True
    weekly_digest: bool = True
    opportunity_alerts: bool = True
    reminders: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "NotificationSettings":
        """Build from a stored mapping, enabling any omitted flag."""
        data = data or {}
        return cls(**{name: bool(data.get(name, True)) for name in cls.__dataclass_fields__})

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass
class VolunteerPreferences:
    """Domain entity for a user's volunteering preferences (one row per user)."""

    user_id: UUID
    interest_areas: list[str] = field(default_factory=list)
    time_preferences: list[str] = field(default_factory=list)
    commitment_levels: list[str] = field(default_factory=list)
    notification_settings: NotificationSettings = field(default_factory=NotificationSettings)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.interest_areas = _unique(self.interest_areas)
        self.time_preferences = _unique(self.time_preferences)
        self.commitment_levels = _unique(self.commitment_levels)
        if isinstance(self.notification_settings, dict):
            self.notification_settings = NotificationSettings.from_dict(self.notification_settings)

    @property
    def is_flexible(self) -> bool:
        return FLEXIBLE_SCHEDULE in self.time_preferences

    def prefers(self, fragment: str) -> bool:
        """True if any time preference mentions ``fragment`` (e.g. "Weekend")."""
        return any(fragment in pref for pref in self.time_preferences)
