"""Opportunity match scoring.

Weighted, additive and capped at 100:

- interest area listed in the preferences: +40
- "Flexible Schedule" preferred: +30, otherwise +20 when the opportunity
  date falls on a weekday and a "Weekday" preference exists, or on a
  Saturday/Sunday and a "Weekend" preference exists
- any commitment level stated: +15 (flat until commitment data exists on
  opportunities)
"""

from collections.abc import Sequence
from datetime import datetime

from core.dates import as_naive_utc
from domain.entities.opportunity import Opportunity, OpportunityMatch
from domain.entities.preferences import VolunteerPreferences

INTEREST_AREA_POINTS = 40
FLEXIBLE_SCHEDULE_POINTS = 30
SCHEDULE_MATCH_POINTS = 20
COMMITMENT_POINTS = 15
MAX_SCORE = 100

CRITERION_INTEREST_AREA = "Interest Area"
CRITERION_SCHEDULE = "Schedule"
CRITERION_COMMITMENT = "Commitment Level"


def _interest_matches(preferences: VolunteerPreferences, opportunity: Opportunity) -> bool:
    return opportunity.interest_area is not None and (
        opportunity.interest_area in preferences.interest_areas
    )


def _schedule_points(preferences: VolunteerPreferences, opportunity: Opportunity) -> int:
    if preferences.is_flexible:
        return FLEXIBLE_SCHEDULE_POINTS
    if opportunity.date is None:
        return 0
    if opportunity.date.weekday() < 5:
        return SCHEDULE_MATCH_POINTS if preferences.prefers("Weekday") else 0
    # Saturday and Sunday both require a weekend preference.
    return SCHEDULE_MATCH_POINTS if preferences.prefers("Weekend") else 0


def score(preferences: VolunteerPreferences, opportunity: Opportunity) -> int:
    """Match score in [0, 100]. Pure function of its arguments."""
    total = 0
    if _interest_matches(preferences, opportunity):
        total += INTEREST_AREA_POINTS
    total += _schedule_points(preferences, opportunity)
    if preferences.commitment_levels:
        total += COMMITMENT_POINTS
    return min(total, MAX_SCORE)


def matching_criteria(preferences: VolunteerPreferences, opportunity: Opportunity) -> list[str]:
    """Labels for the criteria that contributed to the score."""
    criteria: list[str] = []
    if _interest_matches(preferences, opportunity):
        criteria.append(CRITERION_INTEREST_AREA)
    if _schedule_points(preferences, opportunity):
        criteria.append(CRITERION_SCHEDULE)
    if preferences.commitment_levels:
        criteria.append(CRITERION_COMMITMENT)
    return criteria


def rank(
    preferences: VolunteerPreferences,
    candidates: Sequence[Opportunity],
    limit: int,
) -> list[OpportunityMatch]:
    """Score, drop zero scores, sort best first and truncate.

    ``sorted`` is stable, so equal scores keep the candidates' order.
    """
    if limit <= 0:
        return []
    matches = [
        OpportunityMatch(
            opportunity=opportunity,
            match_score=score(preferences, opportunity),
            matching_criteria=tuple(matching_criteria(preferences, opportunity)),
        )
        for opportunity in candidates
    ]
    matches = [match for match in matches if match.match_score]
    matches.sort(key=lambda match: match.match_score or 0, reverse=True)
    return matches[:limit]


def by_recency(candidates: Sequence[Opportunity], limit: int) -> list[OpportunityMatch]:
    """Unscored fallback: newest first, undated candidates last."""
    if limit <= 0:
        return []
    ordered = sorted(candidates, key=_recency_key, reverse=True)
    return [OpportunityMatch(opportunity=o) for o in ordered[:limit]]


def _recency_key(opportunity: Opportunity) -> tuple[bool, datetime]:
    # Pools may mix naive and aware timestamps.
    created = opportunity.created_at
    return (created is not None, as_naive_utc(created) if created else datetime.min)
