"""Activity source records and the unified activity view."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID, uuid4

# --- Source status vocabularies ---
# Each source keeps its own closed set of statuses. They are only
# normalized into a shared label when an Activity is displayed.


class SessionStatus(StrEnum):
    """Status of a volunteer session."""

    REGISTERED = "registered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AttendanceStatus(StrEnum):
    """Attendance status of an event registration."""

    REGISTERED = "registered"
    ATTENDED = "attended"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"


class DonationStatus(StrEnum):
    """Status of a donation record."""

    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class DonationType(StrEnum):
    """Kind of donation."""

    MONETARY = "monetary"
    IN_KIND = "in_kind"


class ActivityType(StrEnum):
    """Source of a unified activity."""

    VOLUNTEER = "volunteer"
    EVENT = "event"
    DONATION = "donation"


ActivityStatus = SessionStatus | AttendanceStatus | DonationStatus

# StrEnum members hash like their values, so labels are keyed per source.
_STATUS_LABELS: dict[ActivityType, dict[str, str]] = {
    ActivityType.VOLUNTEER: {
        SessionStatus.REGISTERED: "Upcoming",
        SessionStatus.COMPLETED: "Completed",
        SessionStatus.CANCELLED: "Cancelled",
    },
    ActivityType.EVENT: {
        AttendanceStatus.REGISTERED: "Upcoming",
        AttendanceStatus.ATTENDED: "Attended",
        AttendanceStatus.NO_SHOW: "Missed",
        AttendanceStatus.CANCELLED: "Cancelled",
    },
    ActivityType.DONATION: {
        DonationStatus.COMPLETED: "Completed",
        DonationStatus.PENDING: "Pending",
        DonationStatus.CANCELLED: "Cancelled",
    },
}


# --- Source records ---


@dataclass
class VolunteerSession:
    """A volunteer shift the user signed up for or worked."""

    user_id: UUID
    title: str
    hours_worked: float
    session_date: datetime
    id: UUID = field(default_factory=uuid4)
    opportunity_id: UUID | None = None
    description: str | None = None
    location: str | None = None
    status: SessionStatus = SessionStatus.COMPLETED
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class EventRegistration:
    """A user's registration for a community event."""

    user_id: UUID
    event_title: str
    id: UUID = field(default_factory=uuid4)
    event_id: UUID | None = None
    registration_date: datetime = field(default_factory=datetime.utcnow)
    attendance_status: AttendanceStatus = AttendanceStatus.REGISTERED
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Donation:
    """Bookkeeping record of a donation captured elsewhere."""

    user_id: UUID
    amount: Decimal
    donation_date: datetime
    id: UUID = field(default_factory=uuid4)
    currency: str = "USD"
    donation_type: DonationType = DonationType.MONETARY
    description: str | None = None
    status: DonationStatus = DonationStatus.COMPLETED
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


# --- Unified view ---


@dataclass(frozen=True, slots=True)
class Activity:
    """Read-only value object: one entry of a user's activity feed."""

    id: str
    type: ActivityType
    title: str
    date: datetime
    status: ActivityStatus
    location: str | None = None
    hours: float | None = None
    amount: Decimal | None = None
    is_sample: bool = False

    @property
    def status_label(self) -> str:
        """Shared display label for the source-specific status."""
        return _STATUS_LABELS[self.type][self.status]
