"""Volunteer preferences API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import CurrentProfile, get_preferences_service
from api.v1.results import unwrap
from api.v1.schemas.preferences import (
    NotificationSettingsSchema,
    PreferencesDetailResponse,
    PreferencesResponse,
    PreferencesUpsert,
)
from core.exceptions import PreferencesNotFoundError
from core.rate_limit import limiter
from domain.entities.preferences import NotificationSettings, VolunteerPreferences
from domain.services.preferences_service import PreferencesService

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _to_response(preferences: VolunteerPreferences) -> PreferencesResponse:
    return PreferencesResponse(
        id=preferences.id,
        user_id=preferences.user_id,
        interest_areas=preferences.interest_areas,
        time_preferences=preferences.time_preferences,
        commitment_levels=preferences.commitment_levels,
        notification_settings=NotificationSettingsSchema(
            **preferences.notification_settings.to_dict()
        ),
        created_at=preferences.created_at,
        updated_at=preferences.updated_at,
    )


@router.get(
    "",
    response_model=PreferencesDetailResponse,
    summary="Get my preferences",
    responses={
        200: {"description": "Preferences, or null if not set yet"},
        503: {"description": "Preference store unavailable"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_preferences(
    request: Request,
    identity: CurrentIdentity,
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesDetailResponse:
    """Get the authenticated user's volunteer preferences. Unset preferences return `null`."""
    preferences = unwrap(await service.get_preferences(identity.id))
    return PreferencesDetailResponse(data=_to_response(preferences) if preferences else None)


@router.put(
    "",
    response_model=PreferencesDetailResponse,
    summary="Save my preferences",
    responses={
        200: {"description": "Preferences as stored"},
        422: {"description": "Validation error"},
        503: {"description": "Preference store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def save_my_preferences(
    request: Request,
    body: PreferencesUpsert,
    profile: CurrentProfile,
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesDetailResponse:
    """
    Create or replace the user's preferences.

    The whole preference set is replaced. Repeated saves never create a
    second record.
    """
    preferences = VolunteerPreferences(
        user_id=profile.id,
        interest_areas=body.interest_areas,
        time_preferences=body.time_preferences,
        commitment_levels=body.commitment_levels,
        notification_settings=NotificationSettings(**body.notification_settings.model_dump()),
    )
    stored = unwrap(await service.save_preferences(preferences))
    return PreferencesDetailResponse(data=_to_response(stored) if stored else None)


@router.patch(
    "/notifications",
    response_model=PreferencesDetailResponse,
    summary="Update my notification settings",
    responses={
        200: {"description": "Preferences with updated notification settings"},
        404: {"description": "Preferences not set yet"},
        503: {"description": "Preference store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_notification_settings(
    request: Request,
    body: NotificationSettingsSchema,
    identity: CurrentIdentity,
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesDetailResponse:
    """Change only the notification switches. Preferences must have been saved first."""
    existing = unwrap(await service.get_preferences(identity.id))
    if existing is None:
        raise PreferencesNotFoundError(str(identity.id))

    updated = unwrap(
        await service.update_notification_settings(
            identity.id, NotificationSettings(**body.model_dump())
        )
    )
    if updated is None:
        raise PreferencesNotFoundError(str(identity.id))
    return PreferencesDetailResponse(data=_to_response(updated))
