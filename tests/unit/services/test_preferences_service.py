"""Unit tests for PreferencesService."""

from uuid import UUID

import pytest
from sqlalchemy.exc import OperationalError

from domain.entities.preferences import NotificationSettings, VolunteerPreferences
from domain.services.preferences_service import PreferencesService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PreferencesService:
    return PreferencesService(lambda: uow)


class TestVolunteerPreferences:
    def test_duplicates_removed_in_order(self, user_id: UUID):
        prefs = VolunteerPreferences(
            user_id=user_id, interest_areas=["Health", "Education", "Health", ""]
        )
        assert prefs.interest_areas == ["Health", "Education"]

    def test_notification_settings_from_partial_dict(self, user_id: UUID):
        prefs = VolunteerPreferences(user_id=user_id, notification_settings={"email": False})

        assert prefs.notification_settings == NotificationSettings(email=False)


class TestSavePreferences:
    async def test_upserts_and_reads_back(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        prefs = VolunteerPreferences(user_id=user_id, interest_areas=["Education"])
        uow.preferences.get_for_user.return_value = prefs

        result = await service.save_preferences(prefs)

        assert result.ok
        assert result.data is prefs
        uow.preferences.upsert.assert_awaited_once_with(prefs)
        uow.preferences.get_for_user.assert_awaited_once_with(user_id)
        assert uow.committed is True

    async def test_missing_row_after_write_is_failure(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None

        result = await service.save_preferences(VolunteerPreferences(user_id=user_id))

        assert not result.ok
        assert result.error.startswith("Failed to save preferences")

    async def test_store_failure_returns_reason(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.upsert.side_effect = OperationalError("INSERT", {}, Exception("refused"))

        result = await service.save_preferences(VolunteerPreferences(user_id=user_id))

        assert not result.ok
        assert result.error == "Failed to save preferences: refused"


class TestGetPreferences:
    async def test_no_row_is_empty_success(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None

        result = await service.get_preferences(user_id)

        assert result.ok
        assert result.data is None


class TestUpdateNotificationSettings:
    async def test_patches_settings(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        settings = NotificationSettings(push=False)
        stored = VolunteerPreferences(user_id=user_id, notification_settings=settings)
        uow.preferences.update_notification_settings.return_value = stored

        result = await service.update_notification_settings(user_id, settings)

        assert result.ok
        assert result.data.notification_settings.push is False
        assert uow.committed is True

    async def test_missing_preferences_is_failure(
        self, service: PreferencesService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.update_notification_settings.return_value = None

        result = await service.update_notification_settings(user_id, NotificationSettings())

        assert not result.ok
        assert uow.committed is False
