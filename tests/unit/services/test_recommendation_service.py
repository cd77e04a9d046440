"""Unit tests for RecommendationService."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from domain.entities.opportunity import Opportunity
from domain.entities.preferences import FLEXIBLE_SCHEDULE, VolunteerPreferences
from domain.services.preferences_service import PreferencesService
from domain.services.recommendation_service import RecommendationService
from tests.unit.conftest import FakeUnitOfWork

NOW = datetime(2026, 10, 1, 12, 0)


@pytest.fixture
def service(uow: FakeUnitOfWork) -> RecommendationService:
    return RecommendationService(
        lambda: uow,
        preferences_service=PreferencesService(lambda: uow),
        pool_size=50,
    )


def _opportunity(title: str, interest_area: str, age_days: int = 0) -> Opportunity:
    return Opportunity(
        id=uuid4(),
        title=title,
        interest_area=interest_area,
        date=NOW,
        created_at=NOW - timedelta(days=age_days),
    )


class TestRankOpportunities:
    async def test_cold_start_returns_pool_by_recency_unscored(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None
        pool = [_opportunity(f"o{i}", "Health", age_days=i) for i in range(5)]

        result = await service.rank_opportunities(user_id, list(reversed(pool)), limit=3)

        assert result.ok
        assert [m.opportunity.title for m in result.data] == ["o0", "o1", "o2"]
        assert all(m.match_score is None for m in result.data)

    async def test_cold_start_accepts_mixed_timezones(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None
        naive = Opportunity(id=uuid4(), title="naive", created_at=datetime(2025, 1, 1))
        aware = Opportunity(
            id=uuid4(), title="aware", created_at=datetime(2025, 1, 2, tzinfo=timezone.utc)
        )

        result = await service.rank_opportunities(user_id, [naive, aware])

        assert result.ok
        assert [m.opportunity.title for m in result.data] == ["aware", "naive"]

    async def test_ranks_with_preferences(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = VolunteerPreferences(
            user_id=user_id,
            interest_areas=["Environmental"],
            time_preferences=[FLEXIBLE_SCHEDULE],
        )
        pool = [_opportunity("other", "Health"), _opportunity("green", "Environmental")]

        result = await service.rank_opportunities(user_id, pool)

        assert [(m.opportunity.title, m.match_score) for m in result.data] == [
            ("green", 70),
            ("other", 30),
        ]

    async def test_preference_failure_propagates_as_failure(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.side_effect = OperationalError("SELECT", {}, Exception("x"))

        result = await service.rank_opportunities(user_id, [])

        assert not result.ok


class TestGetRecommendedOpportunities:
    async def test_cold_start_lists_most_recent(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None
        recent = [_opportunity("a", "Health"), _opportunity("b", "Animals")]
        uow.opportunities.list_recent.return_value = recent

        result = await service.get_recommended_opportunities(user_id, limit=2)

        assert result.ok
        assert [m.opportunity for m in result.data] == recent
        assert all(m.match_score is None for m in result.data)
        uow.opportunities.list_recent.assert_awaited_once_with(limit=2)

    async def test_filters_pool_by_interest_areas(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = VolunteerPreferences(
            user_id=user_id, interest_areas=["Education", "Health"]
        )
        uow.opportunities.list_recent.return_value = [
            _opportunity("tutor", "Education"),
            _opportunity("clinic", "Health"),
        ]

        result = await service.get_recommended_opportunities(user_id, limit=10)

        uow.opportunities.list_recent.assert_awaited_once_with(
            limit=50, interest_areas=["Education", "Health"]
        )
        assert [m.match_score for m in result.data] == [40, 40]
        assert result.data[0].matching_criteria == ("Interest Area",)

    async def test_preferences_without_interest_areas_use_unfiltered_pool(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = VolunteerPreferences(
            user_id=user_id, commitment_levels=["Weekly"]
        )
        uow.opportunities.list_recent.return_value = [_opportunity("any", "Animals")]

        result = await service.get_recommended_opportunities(user_id, limit=5)

        uow.opportunities.list_recent.assert_awaited_once_with(limit=50, interest_areas=None)
        assert [m.match_score for m in result.data] == [15]

    async def test_store_failure_is_reported(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = None
        uow.opportunities.list_recent.side_effect = OperationalError(
            "SELECT", {}, Exception("gone")
        )

        result = await service.get_recommended_opportunities(user_id)

        assert not result.ok
        assert result.error == "Failed to load opportunities: gone"


class TestGetMatchedOpportunities:
    async def test_ranks_recent_pool(
        self, service: RecommendationService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.preferences.get_for_user.return_value = VolunteerPreferences(
            user_id=user_id, interest_areas=["Health"]
        )
        uow.opportunities.list_recent.return_value = [
            _opportunity("no", "Animals"),
            _opportunity("yes", "Health"),
        ]

        result = await service.get_matched_opportunities(user_id, limit=5)

        assert [m.opportunity.title for m in result.data] == ["yes"]
        uow.opportunities.list_recent.assert_awaited_once_with(limit=50)
