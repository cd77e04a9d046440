"""Fixtures for API integration tests."""

from datetime import datetime
from uuid import uuid4

import pytest

from domain.entities.identity import Identity
from infrastructure.database.models import OpportunityModel


@pytest.fixture
def other_auth_headers(auth_provider) -> dict[str, str]:
    """Authorization headers for a second, unrelated user."""
    other = Identity(id=uuid4(), email="other@example.com", metadata={"name": "Other"})
    return {"Authorization": f"Bearer {auth_provider.create_token(other)}"}


@pytest.fixture
async def opportunities(db_session) -> list[OpportunityModel]:
    """Opportunities across interest areas, newest last."""
    rows = [
        OpportunityModel(
            title="After-School Tutor",
            interest_area="Education",
            date=datetime(2026, 10, 19, 15, 0),  # Monday
            created_at=datetime(2026, 9, 1),
        ),
        OpportunityModel(
            title="River Cleanup",
            interest_area="Environment",
            date=datetime(2026, 10, 17, 9, 0),  # Saturday
            created_at=datetime(2026, 9, 2),
        ),
        OpportunityModel(
            title="Reading Buddies",
            interest_area="Education",
            date=datetime(2026, 10, 18, 10, 0),  # Sunday
            created_at=datetime(2026, 9, 3),
        ),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows
