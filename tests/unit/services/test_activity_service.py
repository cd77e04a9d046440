"""Unit tests for ActivityService."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from domain.entities.activity import (
    ActivityType,
    AttendanceStatus,
    Donation,
    DonationType,
    EventRegistration,
    SessionStatus,
    VolunteerSession,
)
from domain.services.activity_service import SAMPLE_ID_PREFIX, ActivityService
from tests.unit.conftest import FakeUnitOfWork

BASE = datetime(2026, 5, 1, 12, 0)


def _store_error(message: str = "connection refused") -> OperationalError:
    return OperationalError("SELECT", {}, Exception(message))


def _session(user_id: UUID, days_ago: int, title: str = "Shift") -> VolunteerSession:
    return VolunteerSession(
        user_id=user_id,
        title=title,
        hours_worked=2.5,
        session_date=BASE - timedelta(days=days_ago),
        location="Library",
    )


def _registration(user_id: UUID, days_ago: int, title: str = "Event") -> EventRegistration:
    return EventRegistration(
        user_id=user_id,
        event_title=title,
        registration_date=BASE - timedelta(days=days_ago),
        attendance_status=AttendanceStatus.ATTENDED,
    )


def _donation(user_id: UUID, days_ago: int, description: str | None = "Gift") -> Donation:
    return Donation(
        user_id=user_id,
        amount=Decimal("10.00"),
        donation_date=BASE - timedelta(days=days_ago),
        description=description,
    )


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ActivityService:
    return ActivityService(lambda: uow, show_samples=False)


@pytest.fixture
def empty_sources(uow: FakeUnitOfWork) -> FakeUnitOfWork:
    uow.volunteer_sessions.list_for_user.return_value = []
    uow.event_registrations.list_for_user.return_value = []
    uow.donations.list_for_user.return_value = []
    return uow


# --- get_user_activities ---


class TestGetUserActivities:
    async def test_merges_sources_newest_first(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        uow = empty_sources
        uow.volunteer_sessions.list_for_user.return_value = [_session(user_id, 1, "s1")]
        uow.event_registrations.list_for_user.return_value = [_registration(user_id, 0, "e0")]
        uow.donations.list_for_user.return_value = [_donation(user_id, 2, "d2")]

        result = await service.get_user_activities(user_id)

        assert result.ok
        assert result.warnings == ()
        assert [a.title for a in result.data] == ["e0", "s1", "d2"]
        assert [a.type for a in result.data] == [
            ActivityType.EVENT,
            ActivityType.VOLUNTEER,
            ActivityType.DONATION,
        ]

    async def test_maps_source_fields(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        session = _session(user_id, 0)
        empty_sources.volunteer_sessions.list_for_user.return_value = [session]

        result = await service.get_user_activities(user_id)

        activity = result.data[0]
        assert activity.id == str(session.id)
        assert activity.status is SessionStatus.COMPLETED
        assert activity.status_label == "Completed"
        assert activity.hours == 2.5
        assert activity.location == "Library"
        assert activity.amount is None

    async def test_failed_source_degrades_partially(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        uow = empty_sources
        uow.volunteer_sessions.list_for_user.return_value = [
            _session(user_id, 1),
            _session(user_id, 3),
        ]
        uow.event_registrations.list_for_user.side_effect = _store_error()
        uow.donations.list_for_user.return_value = [_donation(user_id, 2)]

        result = await service.get_user_activities(user_id)

        assert result.ok
        assert len(result.data) == 3
        assert {a.type for a in result.data} == {ActivityType.VOLUNTEER, ActivityType.DONATION}
        assert len(result.warnings) == 1
        assert "event registrations" in result.warnings[0]

    async def test_all_sources_failing_is_failure(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.volunteer_sessions.list_for_user.side_effect = _store_error("alpha down")
        uow.event_registrations.list_for_user.side_effect = _store_error("beta down")
        uow.donations.list_for_user.side_effect = _store_error("gamma down")

        result = await service.get_user_activities(user_id)

        assert not result.ok
        assert result.data is None
        for reason in ("alpha down", "beta down", "gamma down"):
            assert reason in result.error

    async def test_programming_errors_propagate(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        empty_sources.donations.list_for_user.side_effect = KeyError("bug")

        with pytest.raises(KeyError):
            await service.get_user_activities(user_id)

    async def test_truncates_after_global_sort(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        uow = empty_sources
        # Sessions are all older than every registration.
        uow.volunteer_sessions.list_for_user.return_value = [
            _session(user_id, 20 + i, f"s{i}") for i in range(10)
        ]
        uow.event_registrations.list_for_user.return_value = [
            _registration(user_id, i, f"e{i}") for i in range(10)
        ]

        result = await service.get_user_activities(user_id, limit=5)

        assert [a.title for a in result.data] == ["e0", "e1", "e2", "e3", "e4"]
        uow.volunteer_sessions.list_for_user.assert_awaited_once_with(user_id, limit=5)

    async def test_equal_dates_keep_source_order(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        uow = empty_sources
        uow.volunteer_sessions.list_for_user.return_value = [_session(user_id, 0, "s")]
        uow.event_registrations.list_for_user.return_value = [_registration(user_id, 0, "e")]
        uow.donations.list_for_user.return_value = [_donation(user_id, 0, "d")]

        result = await service.get_user_activities(user_id)

        assert [a.title for a in result.data] == ["s", "e", "d"]

    async def test_aware_and_naive_dates_compare(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        aware = _session(user_id, 0, "aware")
        aware.session_date = datetime(2026, 5, 2, 12, 0, tzinfo=timezone.utc)
        empty_sources.volunteer_sessions.list_for_user.return_value = [aware]
        empty_sources.donations.list_for_user.return_value = [_donation(user_id, 0, "naive")]

        result = await service.get_user_activities(user_id)

        assert [a.title for a in result.data] == ["aware", "naive"]
        assert result.data[0].date.tzinfo is None

    async def test_donation_title_falls_back_to_type(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        donation = _donation(user_id, 0, description=None)
        donation.donation_type = DonationType.IN_KIND
        empty_sources.donations.list_for_user.return_value = [donation]

        result = await service.get_user_activities(user_id)

        assert result.data[0].title == "in_kind donation"
        assert result.data[0].amount == Decimal("10.00")

    async def test_samples_only_for_empty_healthy_feed(
        self, uow: FakeUnitOfWork, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        service = ActivityService(lambda: uow, show_samples=True)

        result = await service.get_user_activities(user_id)

        assert result.data
        assert all(a.is_sample and a.id.startswith(SAMPLE_ID_PREFIX) for a in result.data)

    async def test_no_samples_when_a_source_failed(
        self, uow: FakeUnitOfWork, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        service = ActivityService(lambda: uow, show_samples=True)
        uow.donations.list_for_user.side_effect = _store_error()

        result = await service.get_user_activities(user_id)

        assert result.ok
        assert result.data == []

    async def test_samples_disabled_by_default_setting(
        self, service: ActivityService, empty_sources: FakeUnitOfWork, user_id: UUID
    ):
        result = await service.get_user_activities(user_id)
        assert result.data == []

        result = await service.get_user_activities(user_id, include_samples=True)
        assert len(result.data) == 4

    async def test_each_source_gets_its_own_unit_of_work(self, user_id: UUID):
        opened: list[FakeUnitOfWork] = []

        def factory() -> FakeUnitOfWork:
            uow = FakeUnitOfWork()
            uow.volunteer_sessions.list_for_user.return_value = []
            uow.event_registrations.list_for_user.return_value = []
            uow.donations.list_for_user.return_value = []
            opened.append(uow)
            return uow

        await ActivityService(factory, show_samples=False).get_user_activities(user_id)

        assert len(opened) == 3


# --- writers ---


class TestWriters:
    async def test_add_volunteer_session(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        session = _session(user_id, 0)
        uow.volunteer_sessions.create.return_value = session

        result = await service.add_volunteer_session(session)

        assert result.ok
        assert uow.committed is True

    async def test_negative_hours_rejected(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        session = _session(user_id, 0)
        session.hours_worked = -1

        result = await service.add_volunteer_session(session)

        assert not result.ok
        uow.volunteer_sessions.create.assert_not_awaited()

    async def test_register_for_event_stamps_now(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.event_registrations.create.side_effect = lambda registration: registration
        before = datetime.utcnow()

        result = await service.register_for_event(user_id, "Beach Cleanup")

        assert result.ok
        assert result.data.event_title == "Beach Cleanup"
        assert result.data.attendance_status is AttendanceStatus.REGISTERED
        assert result.data.registration_date >= before

    async def test_update_attendance_missing_registration(
        self, service: ActivityService, uow: FakeUnitOfWork
    ):
        uow.event_registrations.update_attendance.return_value = None

        result = await service.update_event_attendance(uuid4(), AttendanceStatus.ATTENDED)

        assert not result.ok
        assert uow.committed is False

    async def test_update_attendance(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        registration = _registration(user_id, 0)
        uow.event_registrations.update_attendance = AsyncMock(return_value=registration)

        result = await service.update_event_attendance(registration.id, AttendanceStatus.ATTENDED)

        assert result.ok
        uow.event_registrations.update_attendance.assert_awaited_once_with(
            registration.id, AttendanceStatus.ATTENDED
        )

    async def test_non_positive_donation_rejected(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        donation = _donation(user_id, 0)
        donation.amount = Decimal("0")

        result = await service.add_donation(donation)

        assert not result.ok
        uow.donations.create.assert_not_awaited()

    async def test_store_failure_on_write(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.donations.create.side_effect = _store_error("disk full")

        result = await service.add_donation(_donation(user_id, 0))

        assert result.error == "Failed to add donation: disk full"

    async def test_per_source_reader_failure(
        self, service: ActivityService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.volunteer_sessions.list_for_user.side_effect = _store_error()

        result = await service.get_volunteer_sessions(user_id)

        assert not result.ok
