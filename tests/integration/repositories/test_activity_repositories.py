"""Integration tests for the activity source repositories."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from domain.entities.activity import (
    AttendanceStatus,
    Donation,
    DonationStatus,
    EventRegistration,
    SessionStatus,
    VolunteerSession,
)

BASE = datetime(2026, 5, 1, 9, 0)


class TestVolunteerSessionRepository:
    async def test_list_newest_first_with_limit(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            for day in range(3):
                await uow.volunteer_sessions.create(
                    VolunteerSession(
                        user_id=profile_id,
                        title=f"Shift {day}",
                        hours_worked=1,
                        session_date=BASE + timedelta(days=day),
                    )
                )
            await uow.commit()

        async with uow_factory() as uow:
            sessions = await uow.volunteer_sessions.list_for_user(profile_id, limit=2)

        assert [s.title for s in sessions] == ["Shift 2", "Shift 1"]

    async def test_aware_dates_are_stored_as_utc(self, uow_factory, profile_id):
        plus_two = timezone(timedelta(hours=2))
        async with uow_factory() as uow:
            await uow.volunteer_sessions.create(
                VolunteerSession(
                    user_id=profile_id,
                    title="Evening",
                    hours_worked=2,
                    session_date=datetime(2026, 5, 1, 20, 0, tzinfo=plus_two),
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            (stored,) = await uow.volunteer_sessions.list_for_user(profile_id)

        assert stored.session_date == datetime(2026, 5, 1, 18, 0)

    async def test_total_completed_hours_ignores_other_statuses(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            for hours, status in [
                (2.5, SessionStatus.COMPLETED),
                (1.5, SessionStatus.COMPLETED),
                (8, SessionStatus.CANCELLED),
                (3, SessionStatus.REGISTERED),
            ]:
                await uow.volunteer_sessions.create(
                    VolunteerSession(
                        user_id=profile_id,
                        title="Shift",
                        hours_worked=hours,
                        session_date=BASE,
                        status=status,
                    )
                )
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.volunteer_sessions.total_completed_hours(profile_id) == 4.0

    async def test_total_completed_hours_without_sessions(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            assert await uow.volunteer_sessions.total_completed_hours(profile_id) == 0.0


class TestEventRegistrationRepository:
    async def test_update_attendance_and_count(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            first = await uow.event_registrations.create(
                EventRegistration(user_id=profile_id, event_title="Planting Day")
            )
            await uow.event_registrations.create(
                EventRegistration(user_id=profile_id, event_title="Fun Run")
            )
            await uow.commit()

        async with uow_factory() as uow:
            updated = await uow.event_registrations.update_attendance(
                first.id, AttendanceStatus.ATTENDED
            )
            await uow.commit()

        assert updated.attendance_status is AttendanceStatus.ATTENDED

        async with uow_factory() as uow:
            assert await uow.event_registrations.count_attended(profile_id) == 1
            fetched = await uow.event_registrations.get(first.id)

        assert fetched.attendance_status is AttendanceStatus.ATTENDED

    async def test_update_missing_registration(self, uow_factory):
        async with uow_factory() as uow:
            assert (
                await uow.event_registrations.update_attendance(uuid4(), AttendanceStatus.NO_SHOW)
                is None
            )

    async def test_list_is_scoped_to_user(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            await uow.event_registrations.create(
                EventRegistration(user_id=profile_id, event_title="Mine")
            )
            await uow.event_registrations.create(
                EventRegistration(user_id=uuid4(), event_title="Theirs")
            )
            await uow.commit()

        async with uow_factory() as uow:
            registrations = await uow.event_registrations.list_for_user(profile_id)

        assert [r.event_title for r in registrations] == ["Mine"]


class TestDonationRepository:
    async def test_create_and_count_completed(self, uow_factory, profile_id):
        async with uow_factory() as uow:
            for status in (DonationStatus.COMPLETED, DonationStatus.PENDING, DonationStatus.COMPLETED):
                await uow.donations.create(
                    Donation(
                        user_id=profile_id,
                        amount=Decimal("10.00"),
                        donation_date=BASE,
                        status=status,
                    )
                )
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.donations.count_completed(profile_id) == 2
            donations = await uow.donations.list_for_user(profile_id)

        assert len(donations) == 3
        assert donations[0].amount == Decimal("10.00")
        assert donations[0].currency == "USD"
