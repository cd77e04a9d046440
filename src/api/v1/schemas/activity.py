"""Pydantic schemas for Activity API."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.activity import (
    ActivityType,
    AttendanceStatus,
    DonationStatus,
    DonationType,
    SessionStatus,
)


class ActivityResponse(BaseModel):
    """Schema for one entry of the merged activity feed."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "type": "volunteer",
                "title": "Food Bank Assistant",
                "date": "2026-04-05T10:00:00",
                "status": "completed",
                "status_label": "Completed",
                "location": "Eastside Community Center",
                "hours": 4,
                "amount": None,
                "is_sample": False,
            }
        },
    )

    id: str
    type: ActivityType
    title: str
    date: datetime
    status: str
    status_label: str
    location: str | None = None
    hours: float | None = None
    amount: Decimal | None = None
    is_sample: bool = False


class ActivityListResponse(BaseModel):
    """Schema for the activity feed. ``meta.warnings`` lists failed sources."""

    data: list[ActivityResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class VolunteerSessionCreate(BaseModel):
    """Schema for recording a volunteer session."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    hours_worked: float = Field(..., ge=0)
    session_date: datetime
    location: str | None = Field(None, max_length=255)
    opportunity_id: UUID | None = None
    status: SessionStatus = SessionStatus.COMPLETED


class VolunteerSessionResponse(BaseModel):
    """Schema for a volunteer session."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    opportunity_id: UUID | None
    title: str
    description: str | None
    hours_worked: float
    session_date: datetime
    location: str | None
    status: SessionStatus
    created_at: datetime


class EventRegistrationCreate(BaseModel):
    """Schema for registering for an event."""

    event_title: str = Field(..., min_length=1, max_length=255)
    event_id: UUID | None = None


class EventAttendanceUpdate(BaseModel):
    """Schema for changing attendance status."""

    attendance_status: AttendanceStatus


class EventRegistrationResponse(BaseModel):
    """Schema for an event registration."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    event_id: UUID | None
    event_title: str
    registration_date: datetime
    attendance_status: AttendanceStatus
    created_at: datetime


class DonationCreate(BaseModel):
    """Schema for recording a donation captured elsewhere."""

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)
    donation_type: DonationType = DonationType.MONETARY
    description: str | None = Field(None, max_length=1000)
    donation_date: datetime
    status: DonationStatus = DonationStatus.COMPLETED


class DonationResponse(BaseModel):
    """Schema for a donation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: Decimal
    currency: str
    donation_type: DonationType
    description: str | None
    donation_date: datetime
    status: DonationStatus
    created_at: datetime
