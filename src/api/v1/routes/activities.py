"""Activity feed and activity record API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import CurrentProfile, get_activity_service
from api.v1.results import unwrap
from api.v1.schemas.activity import (
    ActivityListResponse,
    ActivityResponse,
    DonationCreate,
    DonationResponse,
    EventAttendanceUpdate,
    EventRegistrationCreate,
    EventRegistrationResponse,
    VolunteerSessionCreate,
    VolunteerSessionResponse,
)
from core.config import settings
from core.exceptions import RegistrationNotFoundError
from core.rate_limit import limiter
from domain.entities.activity import Activity, Donation, VolunteerSession
from domain.services.activity_service import ActivityService

router = APIRouter(prefix="/activities", tags=["activities"])


def _to_response(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        type=activity.type,
        title=activity.title,
        date=activity.date,
        status=activity.status.value,
        status_label=activity.status_label,
        location=activity.location,
        hours=activity.hours,
        amount=activity.amount,
        is_sample=activity.is_sample,
    )


@router.get(
    "",
    response_model=ActivityListResponse,
    summary="Get my activity feed",
    responses={
        200: {"description": "Merged feed, newest first; failed sources in meta.warnings"},
        503: {"description": "Every activity source failed"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_activities(
    request: Request,
    identity: CurrentIdentity,
    limit: int = Query(settings.default_activity_limit, ge=1, le=100),
    include_samples: bool | None = Query(
        None, description="Show sample activities when the feed is empty"
    ),
    service: ActivityService = Depends(get_activity_service),
) -> ActivityListResponse:
    """
    Get volunteer sessions, event registrations and donations as one feed.

    A source that fails to load is left out and named in `meta.warnings`;
    the request only fails when no source could be read.
    """
    result = await service.get_user_activities(
        identity.id, limit=limit, include_samples=include_samples
    )
    activities = unwrap(result) or []
    return ActivityListResponse(
        data=[_to_response(a) for a in activities],
        meta={"limit": limit, "warnings": list(result.warnings)},
    )


@router.post(
    "/volunteer-sessions",
    response_model=VolunteerSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a volunteer session",
    responses={
        201: {"description": "Session recorded"},
        422: {"description": "Validation error"},
        503: {"description": "Activity store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_volunteer_session(
    request: Request,
    body: VolunteerSessionCreate,
    profile: CurrentProfile,
    service: ActivityService = Depends(get_activity_service),
) -> VolunteerSessionResponse:
    """Record a volunteer shift for the authenticated user."""
    session = VolunteerSession(
        user_id=profile.id,
        title=body.title,
        description=body.description,
        hours_worked=body.hours_worked,
        session_date=body.session_date,
        location=body.location,
        opportunity_id=body.opportunity_id,
        status=body.status,
    )
    created = unwrap(await service.add_volunteer_session(session))
    return VolunteerSessionResponse.model_validate(created)


@router.post(
    "/event-registrations",
    response_model=EventRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register for an event",
    responses={
        201: {"description": "Registration recorded"},
        422: {"description": "Validation error"},
        503: {"description": "Activity store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def register_for_event(
    request: Request,
    body: EventRegistrationCreate,
    profile: CurrentProfile,
    service: ActivityService = Depends(get_activity_service),
) -> EventRegistrationResponse:
    """Register the authenticated user for an event, dated now."""
    created = unwrap(
        await service.register_for_event(profile.id, body.event_title, event_id=body.event_id)
    )
    return EventRegistrationResponse.model_validate(created)


@router.patch(
    "/event-registrations/{registration_id}",
    response_model=EventRegistrationResponse,
    summary="Update event attendance",
    responses={
        200: {"description": "Attendance updated"},
        404: {"description": "Registration not found"},
        503: {"description": "Activity store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_event_attendance(
    request: Request,
    registration_id: UUID,
    body: EventAttendanceUpdate,
    identity: CurrentIdentity,
    service: ActivityService = Depends(get_activity_service),
) -> EventRegistrationResponse:
    """Change the attendance status of one of the user's registrations."""
    registration = unwrap(await service.get_event_registration(registration_id))
    # Other users' registrations are reported as missing.
    if registration is None or registration.user_id != identity.id:
        raise RegistrationNotFoundError(str(registration_id))

    updated = unwrap(await service.update_event_attendance(registration_id, body.attendance_status))
    if updated is None:
        raise RegistrationNotFoundError(str(registration_id))
    return EventRegistrationResponse.model_validate(updated)


@router.post(
    "/donations",
    response_model=DonationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a donation",
    responses={
        201: {"description": "Donation recorded"},
        422: {"description": "Validation error"},
        503: {"description": "Activity store unavailable"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_donation(
    request: Request,
    body: DonationCreate,
    profile: CurrentProfile,
    service: ActivityService = Depends(get_activity_service),
) -> DonationResponse:
    """Record a donation that was processed elsewhere. No payment is taken."""
    donation = Donation(
        user_id=profile.id,
        amount=body.amount,
        currency=body.currency.upper(),
        donation_type=body.donation_type,
        description=body.description,
        donation_date=body.donation_date,
        status=body.status,
    )
    created = unwrap(await service.add_donation(donation))
    return DonationResponse.model_validate(created)
