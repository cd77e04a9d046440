"""Opportunity repository protocol."""

from typing import List, Optional, Protocol

from domain.entities.opportunity import Opportunity


class IOpportunityRepository(Protocol):
    """Read-only repository interface for volunteer opportunities."""

    async def list_recent(
        self,
        limit: int = 100,
        interest_areas: Optional[List[str]] = None,
    ) -> List[Opportunity]:
        """List opportunities newest first, optionally restricted to interest areas."""
        ...
