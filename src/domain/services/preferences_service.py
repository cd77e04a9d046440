"""Preferences service layer."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.result import Result
from domain.entities.preferences import NotificationSettings, VolunteerPreferences
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.store_errors import STORE_ERRORS, failure_reason

logger = structlog.get_logger()


class PreferencesService:
    """Service layer for reading and writing a user's volunteer preferences."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def save_preferences(self, preferences: VolunteerPreferences) -> Result[VolunteerPreferences]:
        """Create or replace the user's preferences.

        Writes through the store's native upsert on ``user_id`` so concurrent
        first-time saves cannot produce two rows. The row is then read back
        to confirm what was persisted.
        """
        try:
            async with self._uow_factory() as uow:
                await uow.preferences.upsert(preferences)
                await uow.commit()

            async with self._uow_factory() as uow:
                stored = await uow.preferences.get_for_user(preferences.user_id)
        except STORE_ERRORS as exc:
            logger.warning(
                "preferences_save_failed", user_id=str(preferences.user_id), error=str(exc)
            )
            return Result.failure(failure_reason("save preferences", exc))

        if stored is None:
            logger.error("preferences_missing_after_save", user_id=str(preferences.user_id))
            return Result.failure("Failed to save preferences: row not found after write")

        logger.info(
            "preferences_saved",
            user_id=str(preferences.user_id),
            interest_areas=len(stored.interest_areas),
        )
        return Result.success(stored)

    async def get_preferences(self, user_id: UUID) -> Result[VolunteerPreferences]:
        """Fetch preferences. No row means "not set yet" and is not an error."""
        try:
            async with self._uow_factory() as uow:
                return Result.success(await uow.preferences.get_for_user(user_id))
        except STORE_ERRORS as exc:
            logger.warning("preferences_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load preferences", exc))

    async def update_notification_settings(
        self, user_id: UUID, settings: NotificationSettings
    ) -> Result[VolunteerPreferences]:
        """Patch only the notification switches of existing preferences."""
        try:
            async with self._uow_factory() as uow:
                updated = await uow.preferences.update_notification_settings(user_id, settings)
                if updated is None:
                    return Result.failure(f"Preferences not found: {user_id}")
                await uow.commit()
                return Result.success(updated)
        except STORE_ERRORS as exc:
            logger.warning(
                "notification_settings_update_failed", user_id=str(user_id), error=str(exc)
            )
            return Result.failure(failure_reason("update notification settings", exc))
