"""Activity service layer: source records and the merged activity feed."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from uuid import UUID

import structlog

from core.config import settings
from core.dates import as_naive_utc
from core.result import Result
from domain.entities.activity import (
    Activity,
    ActivityType,
    AttendanceStatus,
    Donation,
    DonationStatus,
    EventRegistration,
    SessionStatus,
    VolunteerSession,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.store_errors import STORE_ERRORS, failure_reason

logger = structlog.get_logger()

SOURCE_VOLUNTEER_SESSIONS = "volunteer_sessions"
SOURCE_EVENT_REGISTRATIONS = "event_registrations"
SOURCE_DONATIONS = "donations"
ACTIVITY_SOURCES = (SOURCE_VOLUNTEER_SESSIONS, SOURCE_EVENT_REGISTRATIONS, SOURCE_DONATIONS)

SAMPLE_ID_PREFIX = "sample-"


def sample_activities() -> list[Activity]:
    """Illustrative entries for an empty feed. Never persisted."""
    return [
        Activity(
            id=f"{SAMPLE_ID_PREFIX}1",
            type=ActivityType.VOLUNTEER,
            title="After-School Tutor",
            date=datetime(2025, 4, 28, 15, 30),
            status=SessionStatus.COMPLETED,
            location="Downtown Elementary School",
            hours=2,
            is_sample=True,
        ),
        Activity(
            id=f"{SAMPLE_ID_PREFIX}2",
            type=ActivityType.EVENT,
            title="Community Garden Planting Day",
            date=datetime(2025, 4, 15, 10, 0),
            status=AttendanceStatus.ATTENDED,
            location="Oak Street Garden",
            is_sample=True,
        ),
        Activity(
            id=f"{SAMPLE_ID_PREFIX}3",
            type=ActivityType.VOLUNTEER,
            title="Food Bank Assistant",
            date=datetime(2025, 4, 5, 10, 0),
            status=SessionStatus.COMPLETED,
            location="Eastside Community Center",
            hours=4,
            is_sample=True,
        ),
        Activity(
            id=f"{SAMPLE_ID_PREFIX}4",
            type=ActivityType.DONATION,
            title="Monthly Support Donation",
            date=datetime(2025, 4, 1, 12, 0),
            status=DonationStatus.COMPLETED,
            amount=Decimal("25.00"),
            is_sample=True,
        ),
    ]


class ActivityService:
    """Service layer for volunteer sessions, event registrations and donations."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        show_samples: bool = settings.show_sample_activities,
    ) -> None:
        self._uow_factory = uow_factory
        self._show_samples = show_samples

    # --- Merged feed ---

    async def get_user_activities(
        self,
        user_id: UUID,
        limit: int = 20,
        include_samples: bool | None = None,
    ) -> Result[list[Activity]]:
        """Merge the three activity sources into one feed, newest first.

        The sources are queried concurrently and settled independently: a
        failed source contributes nothing and is reported in
        ``Result.warnings``. Only when all three fail is the result a failure.

        Each source is bounded by ``limit`` and the cut is applied again after
        the global sort, so a busy source can fill the feed when the others
        are sparse.
        """
        if limit <= 0:
            return Result.success([])

        outcomes = await asyncio.gather(
            self._volunteer_activities(user_id, limit),
            self._event_activities(user_id, limit),
            self._donation_activities(user_id, limit),
            return_exceptions=True,
        )

        activities: list[Activity] = []
        failures: list[str] = []
        for source, outcome in zip(ACTIVITY_SOURCES, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, STORE_ERRORS):
                    raise outcome
                logger.warning(
                    "activity_source_failed",
                    source=source,
                    user_id=str(user_id),
                    error=str(outcome),
                )
                failures.append(failure_reason(f"load {source.replace('_', ' ')}", outcome))
                continue
            activities.extend(outcome)

        if len(failures) == len(ACTIVITY_SOURCES):
            logger.error("activity_feed_unavailable", user_id=str(user_id))
            return Result.failure("; ".join(failures))

        # list.sort is stable: equal dates keep source order.
        activities.sort(key=lambda activity: activity.date, reverse=True)
        feed = activities[:limit]

        show_samples = self._show_samples if include_samples is None else include_samples
        if not feed and not failures and show_samples:
            feed = sample_activities()[:limit]

        return Result.success(feed, warnings=tuple(failures))

    async def _volunteer_activities(self, user_id: UUID, limit: int) -> list[Activity]:
        async with self._uow_factory() as uow:
            sessions = await uow.volunteer_sessions.list_for_user(user_id, limit=limit)
        return [
            Activity(
                id=str(session.id),
                type=ActivityType.VOLUNTEER,
                title=session.title,
                date=as_naive_utc(session.session_date),
                status=SessionStatus(session.status),
                location=session.location,
                hours=session.hours_worked,
            )
            for session in sessions
        ]

    async def _event_activities(self, user_id: UUID, limit: int) -> list[Activity]:
        async with self._uow_factory() as uow:
            registrations = await uow.event_registrations.list_for_user(user_id, limit=limit)
        # Every attendance status is included; display decides what to show.
        return [
            Activity(
                id=str(registration.id),
                type=ActivityType.EVENT,
                title=registration.event_title,
                date=as_naive_utc(registration.registration_date),
                status=AttendanceStatus(registration.attendance_status),
            )
            for registration in registrations
        ]

    async def _donation_activities(self, user_id: UUID, limit: int) -> list[Activity]:
        async with self._uow_factory() as uow:
            donations = await uow.donations.list_for_user(user_id, limit=limit)
        return [
            Activity(
                id=str(donation.id),
                type=ActivityType.DONATION,
                title=donation.description or f"{donation.donation_type} donation",
                date=as_naive_utc(donation.donation_date),
                status=DonationStatus(donation.status),
                amount=donation.amount,
            )
            for donation in donations
        ]

    # --- Per-source reads ---

    async def get_volunteer_sessions(
        self, user_id: UUID, limit: int = 50
    ) -> Result[list[VolunteerSession]]:
        try:
            async with self._uow_factory() as uow:
                return Result.success(await uow.volunteer_sessions.list_for_user(user_id, limit=limit))
        except STORE_ERRORS as exc:
            logger.warning("volunteer_sessions_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load volunteer sessions", exc))

    async def get_event_registrations(
        self, user_id: UUID, limit: int = 50
    ) -> Result[list[EventRegistration]]:
        try:
            async with self._uow_factory() as uow:
                return Result.success(
                    await uow.event_registrations.list_for_user(user_id, limit=limit)
                )
        except STORE_ERRORS as exc:
            logger.warning("event_registrations_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load event registrations", exc))

    async def get_event_registration(
        self, registration_id: UUID
    ) -> Result[EventRegistration]:
        """Fetch one registration. A missing row is a successful empty result."""
        try:
            async with self._uow_factory() as uow:
                return Result.success(await uow.event_registrations.get(registration_id))
        except STORE_ERRORS as exc:
            logger.warning(
                "event_registration_fetch_failed",
                registration_id=str(registration_id),
                error=str(exc),
            )
            return Result.failure(failure_reason("load event registration", exc))

    async def get_donations(self, user_id: UUID, limit: int = 50) -> Result[list[Donation]]:
        try:
            async with self._uow_factory() as uow:
                return Result.success(await uow.donations.list_for_user(user_id, limit=limit))
        except STORE_ERRORS as exc:
            logger.warning("donations_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load donations", exc))

    # --- Writes ---

    async def add_volunteer_session(self, session: VolunteerSession) -> Result[VolunteerSession]:
        """Record a volunteer session."""
        if session.hours_worked < 0:
            return Result.failure("Hours worked cannot be negative")
        try:
            async with self._uow_factory() as uow:
                created = await uow.volunteer_sessions.create(session)
                await uow.commit()
        except STORE_ERRORS as exc:
            logger.warning(
                "volunteer_session_add_failed", user_id=str(session.user_id), error=str(exc)
            )
            return Result.failure(failure_reason("add volunteer session", exc))
        logger.info("volunteer_session_added", user_id=str(session.user_id), session_id=str(created.id))
        return Result.success(created)

    async def register_for_event(
        self,
        user_id: UUID,
        event_title: str,
        event_id: UUID | None = None,
    ) -> Result[EventRegistration]:
        """Register the user for an event, stamped with the current time."""
        registration = EventRegistration(
            user_id=user_id,
            event_title=event_title,
            event_id=event_id,
            registration_date=datetime.utcnow(),
        )
        try:
            async with self._uow_factory() as uow:
                created = await uow.event_registrations.create(registration)
                await uow.commit()
        except STORE_ERRORS as exc:
            logger.warning("event_registration_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("register for event", exc))
        logger.info("event_registered", user_id=str(user_id), registration_id=str(created.id))
        return Result.success(created)

    async def update_event_attendance(
        self, registration_id: UUID, status: AttendanceStatus
    ) -> Result[EventRegistration]:
        """Change the attendance status of a registration."""
        try:
            async with self._uow_factory() as uow:
                updated = await uow.event_registrations.update_attendance(registration_id, status)
                if updated is None:
                    return Result.failure(f"Event registration not found: {registration_id}")
                await uow.commit()
                return Result.success(updated)
        except STORE_ERRORS as exc:
            logger.warning(
                "event_attendance_update_failed",
                registration_id=str(registration_id),
                error=str(exc),
            )
            return Result.failure(failure_reason("update event attendance", exc))

    async def add_donation(self, donation: Donation) -> Result[Donation]:
        """Record a donation that was captured elsewhere."""
        if donation.amount <= 0:
            return Result.failure("Donation amount must be positive")
        try:
            async with self._uow_factory() as uow:
                created = await uow.donations.create(donation)
                await uow.commit()
        except STORE_ERRORS as exc:
            logger.warning("donation_add_failed", user_id=str(donation.user_id), error=str(exc))
            return Result.failure(failure_reason("add donation", exc))
        logger.info("donation_added", user_id=str(donation.user_id), donation_id=str(created.id))
        return Result.success(created)
