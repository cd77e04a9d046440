"""SQLAlchemy implementation of Volunteer Preferences repository."""

from datetime import datetime
from typing import Any, Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.preferences import NotificationSettings, VolunteerPreferences
from infrastructure.database.models import VolunteerPreferencesModel

# Dialects with INSERT ... ON CONFLICT support.
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SQLAlchemyPreferencesRepository:
    """SQLAlchemy implementation of IPreferencesRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: UUID) -> VolunteerPreferences | None:
        """Get the preference row for a user."""
        stmt = select(VolunteerPreferencesModel).where(VolunteerPreferencesModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def upsert(self, preferences: VolunteerPreferences) -> None:
        """INSERT ... ON CONFLICT (user_id) DO UPDATE.

        On conflict every preference field is replaced and updated_at is
        refreshed; id and created_at keep their original values.
        """
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Upsert is not supported for dialect {dialect}")

        now = datetime.utcnow()
        stmt = insert(VolunteerPreferencesModel).values(
            id=preferences.id,
            user_id=preferences.user_id,
            interest_areas=list(preferences.interest_areas),
            time_preferences=list(preferences.time_preferences),
            commitment_levels=list(preferences.commitment_levels),
            notification_settings=preferences.notification_settings.to_dict(),
            created_at=preferences.created_at,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "interest_areas": stmt.excluded.interest_areas,
                "time_preferences": stmt.excluded.time_preferences,
                "commitment_levels": stmt.excluded.commitment_levels,
                "notification_settings": stmt.excluded.notification_settings,
                "updated_at": now,
            },
        )
        await self._session.execute(stmt)

    async def update_notification_settings(
        self, user_id: UUID, settings: NotificationSettings
    ) -> VolunteerPreferences | None:
        """Replace only the notification settings."""
        stmt = select(VolunteerPreferencesModel).where(VolunteerPreferencesModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.notification_settings = settings.to_dict()
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: VolunteerPreferencesModel) -> VolunteerPreferences:
        """Convert ORM model to domain entity."""
        return VolunteerPreferences(
            id=model.id,
            user_id=model.user_id,
            interest_areas=list(model.interest_areas or []),
            time_preferences=list(model.time_preferences or []),
            commitment_levels=list(model.commitment_levels or []),
            notification_settings=NotificationSettings.from_dict(model.notification_settings),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
