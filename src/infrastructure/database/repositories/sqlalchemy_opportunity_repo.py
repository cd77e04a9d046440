"""SQLAlchemy implementation of Opportunity repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.opportunity import Opportunity
from infrastructure.database.models import OpportunityModel


class SQLAlchemyOpportunityRepository:
    """SQLAlchemy implementation of IOpportunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_recent(
        self,
        limit: int = 100,
        interest_areas: Optional[List[str]] = None,
    ) -> List[Opportunity]:
        """List opportunities newest first, optionally filtered by interest area."""
        stmt = select(OpportunityModel)
        if interest_areas:
            stmt = stmt.where(OpportunityModel.interest_area.in_(interest_areas))
        stmt = stmt.order_by(OpportunityModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: OpportunityModel) -> Opportunity:
        """Convert ORM model to domain entity."""
        return Opportunity(
            id=model.id,
            title=model.title,
            interest_area=model.interest_area,
            location=model.location,
            date=model.date,
            description=model.description,
            created_at=model.created_at,
        )
