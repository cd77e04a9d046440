"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import MAX_PROFILE_NAME_LENGTH


class ProfileUpdate(BaseModel):
    """Schema for a profile edit.

    Unknown fields are kept so the route can reject them by name.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(None, min_length=1, max_length=MAX_PROFILE_NAME_LENGTH)
    avatar_url: str | None = Field(None, max_length=500)


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jane@example.com",
                "name": "Jane",
                "avatar_url": None,
                "volunteer_hours": 12,
                "events_attended": 3,
                "donations_made": 1,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    name: str
    avatar_url: str | None
    volunteer_hours: int
    events_attended: int
    donations_made: int
    created_at: datetime
    updated_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile response."""

    data: ProfileResponse
