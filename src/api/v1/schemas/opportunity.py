"""Pydantic schemas for Opportunity API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OpportunityResponse(BaseModel):
    """Schema for an opportunity."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    interest_area: str | None = None
    location: str | None = None
    date: datetime | None = None
    description: str | None = None
    created_at: datetime | None = None


class OpportunityMatchResponse(BaseModel):
    """Schema for a ranked opportunity. ``match_score`` is null when unranked."""

    model_config = ConfigDict(from_attributes=True)

    opportunity: OpportunityResponse
    match_score: int | None = None
    matching_criteria: list[str] = []


class OpportunityMatchListResponse(BaseModel):
    """Schema for a list of ranked opportunities."""

    data: list[OpportunityMatchResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
