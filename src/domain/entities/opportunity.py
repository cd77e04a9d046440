"""Volunteer opportunity entities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Opportunity:
    """Read-only volunteering opportunity that can be ranked for a user."""

    id: UUID
    title: str
    interest_area: str | None = None
    location: str | None = None
    date: datetime | None = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class OpportunityMatch:
    """An opportunity paired with its match score.

    ``match_score`` is None for unranked (cold-start) results.
    """

    opportunity: Opportunity
    match_score: int | None = None
    matching_criteria: tuple[str, ...] = ()

    @property
    def opportunity_id(self) -> UUID:
        return self.opportunity.id
