"""Pydantic schemas for Preferences API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NotificationSettingsSchema(BaseModel):
    """Notification switches. Omitted flags default to enabled."""

    model_config = ConfigDict(from_attributes=True)

    email: bool = True
    push: bool = True
    weekly_digest: bool = True
    opportunity_alerts: bool = True
    reminders: bool = True


class PreferencesUpsert(BaseModel):
    """Schema for creating or replacing preferences."""

    interest_areas: list[str] = Field(default_factory=list, max_length=50)
    time_preferences: list[str] = Field(default_factory=list, max_length=20)
    commitment_levels: list[str] = Field(default_factory=list, max_length=20)
    notification_settings: NotificationSettingsSchema = Field(
        default_factory=NotificationSettingsSchema
    )


class PreferencesResponse(BaseModel):
    """Schema for Preferences response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "interest_areas": ["Environmental"],
                "time_preferences": ["Weekends", "Flexible Schedule"],
                "commitment_levels": ["One-time"],
                "notification_settings": {
                    "email": True,
                    "push": True,
                    "weekly_digest": False,
                    "opportunity_alerts": True,
                    "reminders": True,
                },
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    interest_areas: list[str]
    time_preferences: list[str]
    commitment_levels: list[str]
    notification_settings: NotificationSettingsSchema
    created_at: datetime
    updated_at: datetime


class PreferencesDetailResponse(BaseModel):
    """Schema for single Preferences response. ``data`` is null when unset."""

    data: PreferencesResponse | None
