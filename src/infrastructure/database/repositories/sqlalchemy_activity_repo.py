"""SQLAlchemy implementations of the activity source repositories."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.dates import as_naive_utc
from domain.entities.activity import (
    AttendanceStatus,
    Donation,
    DonationStatus,
    DonationType,
    EventRegistration,
    SessionStatus,
    VolunteerSession,
)
from infrastructure.database.models import (
    DonationModel,
    EventRegistrationModel,
    VolunteerSessionModel,
)


class SQLAlchemyVolunteerSessionRepository:
    """SQLAlchemy implementation of IVolunteerSessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: VolunteerSession) -> VolunteerSession:
        """Record a volunteer session."""
        model = self._to_model(session)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[VolunteerSession]:
        """Sessions for a user, newest first."""
        stmt = (
            select(VolunteerSessionModel)
            .where(VolunteerSessionModel.user_id == user_id)
            .order_by(VolunteerSessionModel.session_date.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def total_completed_hours(self, user_id: UUID) -> float:
        """Sum of hours over completed sessions."""
        stmt = select(func.coalesce(func.sum(VolunteerSessionModel.hours_worked), 0)).where(
            VolunteerSessionModel.user_id == user_id,
            VolunteerSessionModel.status == SessionStatus.COMPLETED.value,
        )
        result = await self._session.execute(stmt)
        return float(result.scalar_one())

    def _to_entity(self, model: VolunteerSessionModel) -> VolunteerSession:
        """Convert ORM model to domain entity."""
        return VolunteerSession(
            id=model.id,
            user_id=model.user_id,
            opportunity_id=model.opportunity_id,
            title=model.title,
            description=model.description,
            hours_worked=model.hours_worked,
            session_date=model.session_date,
            location=model.location,
            status=SessionStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: VolunteerSession) -> VolunteerSessionModel:
        """Convert domain entity to ORM model."""
        return VolunteerSessionModel(
            id=entity.id,
            user_id=entity.user_id,
            opportunity_id=entity.opportunity_id,
            title=entity.title,
            description=entity.description,
            hours_worked=entity.hours_worked,
            session_date=as_naive_utc(entity.session_date),
            location=entity.location,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class SQLAlchemyEventRegistrationRepository:
    """SQLAlchemy implementation of IEventRegistrationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, registration: EventRegistration) -> EventRegistration:
        """Record an event registration."""
        model = self._to_model(registration)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get(self, registration_id: UUID) -> Optional[EventRegistration]:
        """Get a registration by ID."""
        stmt = select(EventRegistrationModel).where(EventRegistrationModel.id == registration_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update_attendance(
        self, registration_id: UUID, status: AttendanceStatus
    ) -> Optional[EventRegistration]:
        """Change attendance status."""
        stmt = select(EventRegistrationModel).where(EventRegistrationModel.id == registration_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.attendance_status = status.value
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[EventRegistration]:
        """Registrations for a user, newest first."""
        stmt = (
            select(EventRegistrationModel)
            .where(EventRegistrationModel.user_id == user_id)
            .order_by(EventRegistrationModel.registration_date.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_attended(self, user_id: UUID) -> int:
        """Number of attended events."""
        stmt = select(func.count(EventRegistrationModel.id)).where(
            EventRegistrationModel.user_id == user_id,
            EventRegistrationModel.attendance_status == AttendanceStatus.ATTENDED.value,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    def _to_entity(self, model: EventRegistrationModel) -> EventRegistration:
        """Convert ORM model to domain entity."""
        return EventRegistration(
            id=model.id,
            user_id=model.user_id,
            event_id=model.event_id,
            event_title=model.event_title,
            registration_date=model.registration_date,
            attendance_status=AttendanceStatus(model.attendance_status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: EventRegistration) -> EventRegistrationModel:
        """Convert domain entity to ORM model."""
        return EventRegistrationModel(
            id=entity.id,
            user_id=entity.user_id,
            event_id=entity.event_id,
            event_title=entity.event_title,
            registration_date=as_naive_utc(entity.registration_date),
            attendance_status=entity.attendance_status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class SQLAlchemyDonationRepository:
    """SQLAlchemy implementation of IDonationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, donation: Donation) -> Donation:
        """Record a donation."""
        model = self._to_model(donation)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> List[Donation]:
        """Donations for a user, newest first."""
        stmt = (
            select(DonationModel)
            .where(DonationModel.user_id == user_id)
            .order_by(DonationModel.donation_date.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_completed(self, user_id: UUID) -> int:
        """Number of completed donations."""
        stmt = select(func.count(DonationModel.id)).where(
            DonationModel.user_id == user_id,
            DonationModel.status == DonationStatus.COMPLETED.value,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    def _to_entity(self, model: DonationModel) -> Donation:
        """Convert ORM model to domain entity."""
        return Donation(
            id=model.id,
            user_id=model.user_id,
            amount=model.amount,
            currency=model.currency,
            donation_type=DonationType(model.donation_type),
            description=model.description,
            donation_date=model.donation_date,
            status=DonationStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Donation) -> DonationModel:
        """Convert domain entity to ORM model."""
        return DonationModel(
            id=entity.id,
            user_id=entity.user_id,
            amount=entity.amount,
            currency=entity.currency,
            donation_type=entity.donation_type.value,
            description=entity.description,
            donation_date=as_naive_utc(entity.donation_date),
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
