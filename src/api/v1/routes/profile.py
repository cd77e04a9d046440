"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import CurrentProfile, get_profile_service
from api.v1.results import unwrap
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse, ProfileUpdate
from core.exceptions import ImmutableFieldError, ProfileNotFoundError
from core.rate_limit import limiter
from domain.entities.profile import EDITABLE_PROFILE_FIELDS
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={
        200: {"description": "The caller's profile, created on first access"},
        503: {"description": "Profile store unavailable"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    profile: CurrentProfile,
) -> ProfileDetailResponse:
    """Get the authenticated user's profile, creating it if this is the first visit."""
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.patch(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Update my profile",
    responses={
        200: {"description": "Profile updated successfully"},
        400: {"description": "Non-editable field in request"},
        422: {"description": "Validation error"},
        503: {"description": "Profile store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    profile: CurrentProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Update the display name or avatar. Both fields are optional (partial update).

    Set `avatar_url` to `null` to remove the avatar. Counters and email are
    managed by the system and cannot be edited.
    """
    fields = body.model_dump(exclude_unset=True)
    rejected = set(fields) - EDITABLE_PROFILE_FIELDS
    if rejected:
        raise ImmutableFieldError(sorted(rejected))
    if fields.get("name", "") is None:
        del fields["name"]
    if not fields:
        return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))

    updated = unwrap(await service.update_profile(profile.id, fields))
    if updated is None:
        raise ProfileNotFoundError(str(profile.id))
    return ProfileDetailResponse(data=ProfileResponse.model_validate(updated))


@router.post(
    "/me/stats/refresh",
    response_model=ProfileDetailResponse,
    summary="Recompute my engagement stats",
    responses={
        200: {"description": "Profile with recomputed counters"},
        503: {"description": "Profile store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def refresh_my_stats(
    request: Request,
    profile: CurrentProfile,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Recompute volunteer hours, events attended and donations from activity records."""
    updated = unwrap(await service.refresh_stats(profile.id))
    if updated is None:
        raise ProfileNotFoundError(str(profile.id))
    return ProfileDetailResponse(data=ProfileResponse.model_validate(updated))
