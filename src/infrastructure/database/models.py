"""SQLAlchemy ORM models."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from domain.entities.profile import MAX_PROFILE_NAME_LENGTH


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model. The primary key is the identity ID."""

    __tablename__ = "user_profiles"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_PROFILE_NAME_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    volunteer_hours: Mapped[int] = mapped_column(
        Integer,
        CheckConstraint("volunteer_hours >= 0"),
        nullable=False,
        default=0,
    )
    events_attended: Mapped[int] = mapped_column(
        Integer,
        CheckConstraint("events_attended >= 0"),
        nullable=False,
        default=0,
    )
    donations_made: Mapped[int] = mapped_column(
        Integer,
        CheckConstraint("donations_made >= 0"),
        nullable=False,
        default=0,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class VolunteerPreferencesModel(Base):
    """Volunteer preferences model (one row per user, enforced by a unique key)."""

    __tablename__ = "user_volunteer_preferences"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    interest_areas: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    time_preferences: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    commitment_levels: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    notification_settings: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class OpportunityModel(Base):
    """Volunteer opportunity model (maintained outside this service)."""

    __tablename__ = "volunteer_opportunities"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    interest_area: Mapped[str | None] = mapped_column(String(100), index=True)
    location: Mapped[str | None] = mapped_column(String(255))
    date: Mapped[datetime | None] = mapped_column(DateTime)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


class VolunteerSessionModel(Base):
    """Volunteer session model."""

    __tablename__ = "user_volunteer_sessions"
    __table_args__ = (Index("ix_user_volunteer_sessions_user_date", "user_id", "session_date"),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    opportunity_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("volunteer_opportunities.id", ondelete="SET NULL"),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    hours_worked: Mapped[float] = mapped_column(
        Float,
        CheckConstraint("hours_worked >= 0"),
        nullable=False,
        default=0,
    )
    session_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint("status IN ('registered', 'completed', 'cancelled')"),
        nullable=False,
        default="completed",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class EventRegistrationModel(Base):
    """Event registration model."""

    __tablename__ = "user_event_registrations"
    __table_args__ = (
        Index("ix_user_event_registrations_user_date", "user_id", "registration_date"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    event_id: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    event_title: Mapped[str] = mapped_column(String(255), nullable=False)
    registration_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    attendance_status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "attendance_status IN ('registered', 'attended', 'no_show', 'cancelled')"
        ),
        nullable=False,
        default="registered",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class DonationModel(Base):
    """Donation bookkeeping model."""

    __tablename__ = "user_donations"
    __table_args__ = (Index("ix_user_donations_user_date", "user_id", "donation_date"),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        CheckConstraint("amount > 0"),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    donation_type: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint("donation_type IN ('monetary', 'in_kind')"),
        nullable=False,
        default="monetary",
    )
    description: Mapped[str | None] = mapped_column(Text)
    donation_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint("status IN ('completed', 'pending', 'cancelled')"),
        nullable=False,
        default="completed",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
