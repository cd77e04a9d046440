"""Opportunity recommendation service."""

from collections.abc import Callable, Sequence
from uuid import UUID

import structlog

from core.config import settings
from core.result import Result
from domain.entities.opportunity import Opportunity, OpportunityMatch
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import scoring
from domain.services.preferences_service import PreferencesService
from domain.services.store_errors import STORE_ERRORS, failure_reason

logger = structlog.get_logger()


class RecommendationService:
    """Ranks volunteer opportunities against a user's preferences."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        preferences_service: PreferencesService,
        pool_size: int = settings.opportunity_pool_size,
    ) -> None:
        self._uow_factory = uow_factory
        self._preferences = preferences_service
        self._pool_size = pool_size

    async def rank_opportunities(
        self,
        user_id: UUID,
        candidate_pool: Sequence[Opportunity],
        limit: int = 20,
    ) -> Result[list[OpportunityMatch]]:
        """Rank a caller-supplied pool for the user.

        Without preferences (cold start) the pool comes back unscored,
        newest first. That is a normal result, not an error.
        """
        prefs = await self._preferences.get_preferences(user_id)
        if not prefs.ok:
            return Result.failure(prefs.error or "Failed to load preferences")
        if prefs.data is None:
            return Result.success(scoring.by_recency(candidate_pool, limit))
        return Result.success(scoring.rank(prefs.data, candidate_pool, limit))

    async def get_recommended_opportunities(
        self, user_id: UUID, limit: int = 10
    ) -> Result[list[OpportunityMatch]]:
        """Recommend opportunities, pre-filtered by interest area in the store."""
        prefs = await self._preferences.get_preferences(user_id)
        if not prefs.ok:
            return Result.failure(prefs.error or "Failed to load preferences")

        preferences = prefs.data
        try:
            async with self._uow_factory() as uow:
                if preferences is None:
                    recent = await uow.opportunities.list_recent(limit=limit)
                    return Result.success([OpportunityMatch(opportunity=o) for o in recent])

                candidates = await uow.opportunities.list_recent(
                    limit=max(self._pool_size, limit),
                    interest_areas=preferences.interest_areas or None,
                )
        except STORE_ERRORS as exc:
            logger.warning("recommendations_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load opportunities", exc))

        return Result.success(scoring.rank(preferences, candidates, limit))

    async def get_matched_opportunities(
        self, user_id: UUID, limit: int = 20
    ) -> Result[list[OpportunityMatch]]:
        """Rank the most recent pool of opportunities for the user."""
        try:
            async with self._uow_factory() as uow:
                candidates = await uow.opportunities.list_recent(limit=max(self._pool_size, limit))
        except STORE_ERRORS as exc:
            logger.warning("matches_fetch_failed", user_id=str(user_id), error=str(exc))
            return Result.failure(failure_reason("load opportunities", exc))

        return await self.rank_opportunities(user_id, candidates, limit)
