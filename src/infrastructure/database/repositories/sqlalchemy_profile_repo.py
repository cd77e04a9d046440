"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UUID) -> Profile | None:
        """Get a profile by identity ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile. The flush raises IntegrityError on a duplicate ID."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.name = profile.name
        model.avatar_url = profile.avatar_url
        model.volunteer_hours = profile.volunteer_hours
        model.events_attended = profile.events_attended
        model.donations_made = profile.donations_made
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            email=model.email,
            name=model.name,
            avatar_url=model.avatar_url,
            volunteer_hours=model.volunteer_hours,
            events_attended=model.events_attended,
            donations_made=model.donations_made,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            avatar_url=entity.avatar_url,
            volunteer_hours=entity.volunteer_hours,
            events_attended=entity.events_attended,
            donations_made=entity.donations_made,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
