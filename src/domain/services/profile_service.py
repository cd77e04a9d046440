"""Profile service layer: idempotent creation, edits and stats recompute."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.result import Result
from domain.entities.identity import Identity
from domain.entities.profile import (
    DEFAULT_PROFILE_NAME,
    EDITABLE_PROFILE_FIELDS,
    MAX_PROFILE_NAME_LENGTH,
    Profile,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.store_errors import STORE_ERRORS, failure_reason, is_unique_violation

logger = structlog.get_logger()


def default_profile_name(identity: Identity) -> str:
    """Signup name, else the local part of the email, else a placeholder.

    Clipped to the stored column length.
    """
    name = identity.display_name
    if not name:
        name = identity.email.split("@", 1)[0].strip() if identity.email else ""
    return name[:MAX_PROFILE_NAME_LENGTH].rstrip() or DEFAULT_PROFILE_NAME


class ProfileService:
    """Service layer guaranteeing exactly one profile per identity."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def ensure_profile(self, identity: Identity) -> Result[Profile]:
        """Return the identity's profile, creating it on first sign-in.

        Safe to call concurrently for the same identity. The insert relies on
        the primary key; losing the race to another creator shows up as a
        unique violation and is resolved by re-reading the winner's row.
        """
        action = "load profile"
        try:
            async with self._uow_factory() as uow:
                existing = await uow.profiles.get(identity.id)
                if existing:
                    return Result.success(existing)

                profile = Profile(
                    id=identity.id,
                    email=identity.email,
                    name=default_profile_name(identity),
                )
                action = "create profile"
                try:
                    created = await uow.profiles.create(profile)
                    await uow.commit()
                except IntegrityError as exc:
                    await uow.rollback()
                    # Only a duplicate key means "someone else created it".
                    if not is_unique_violation(exc):
                        raise
                    logger.debug("profile_create_race_resolved", user_id=str(identity.id))
                    action = "load profile"
                else:
                    logger.info("profile_created", user_id=str(identity.id))
                    return Result.success(created)

            async with self._uow_factory() as uow:
                winner = await uow.profiles.get(identity.id)
            if winner is None:
                return Result.failure("Profile creation conflicted but no profile was found")
            return Result.success(winner)
        except STORE_ERRORS as exc:
            logger.warning(
                "profile_ensure_failed", user_id=str(identity.id), action=action, error=str(exc)
            )
            return Result.failure(failure_reason(action, exc))

    async def get_profile(self, user_id: UUID) -> Result[Profile]:
        """Fetch a profile. A missing profile is a successful empty result."""
        try:
            async with self._uow_factory() as uow:
                return Result.success(await uow.profiles.get(user_id))
        except STORE_ERRORS as exc:
            logger.warning("profile_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load profile", exc))

    async def update_profile(self, user_id: UUID, fields: dict[str, Any]) -> Result[Profile]:
        """Apply a user edit. Only the name and avatar may change."""
        rejected = set(fields) - EDITABLE_PROFILE_FIELDS
        if rejected:
            return Result.failure(f"Fields cannot be updated: {', '.join(sorted(rejected))}")

        try:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get(user_id)
                if not profile:
                    return Result.failure(f"Profile not found: {user_id}")

                for name, value in fields.items():
                    setattr(profile, name, value)
                profile.updated_at = datetime.utcnow()

                updated = await uow.profiles.update(profile)
                await uow.commit()
                return Result.success(updated)
        except STORE_ERRORS as exc:
            logger.warning("profile_update_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("update profile", exc))

    async def refresh_stats(self, user_id: UUID) -> Result[Profile]:
        """Recompute the engagement counters from the activity records."""
        try:
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get(user_id)
                if not profile:
                    return Result.failure(f"Profile not found: {user_id}")

                hours = await uow.volunteer_sessions.total_completed_hours(user_id)
                profile.volunteer_hours = int(round(hours or 0))
                profile.events_attended = await uow.event_registrations.count_attended(user_id)
                profile.donations_made = await uow.donations.count_completed(user_id)
                profile.updated_at = datetime.utcnow()

                updated = await uow.profiles.update(profile)
                await uow.commit()
                logger.info(
                    "profile_stats_refreshed",
                    user_id=str(user_id),
                    volunteer_hours=updated.volunteer_hours,
                    events_attended=updated.events_attended,
                    donations_made=updated.donations_made,
                )
                return Result.success(updated)
        except STORE_ERRORS as exc:
            logger.warning("profile_stats_refresh_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("refresh profile stats", exc))
