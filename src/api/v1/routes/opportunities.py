"""Opportunity recommendation API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_recommendation_service
from api.v1.results import unwrap
from api.v1.schemas.opportunity import (
    OpportunityMatchListResponse,
    OpportunityMatchResponse,
    OpportunityResponse,
)
from core.rate_limit import limiter
from domain.entities.opportunity import OpportunityMatch
from domain.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/opportunities", tags=["opportunities"])


def _to_response(match: OpportunityMatch) -> OpportunityMatchResponse:
    return OpportunityMatchResponse(
        opportunity=OpportunityResponse.model_validate(match.opportunity),
        match_score=match.match_score,
        matching_criteria=list(match.matching_criteria),
    )


def _list_response(matches: list[OpportunityMatch], limit: int) -> OpportunityMatchListResponse:
    return OpportunityMatchListResponse(
        data=[_to_response(m) for m in matches],
        meta={
            "limit": limit,
            "total": len(matches),
            "ranked": any(m.match_score is not None for m in matches),
        },
    )


@router.get(
    "/recommended",
    response_model=OpportunityMatchListResponse,
    summary="Recommended opportunities",
    responses={
        200: {"description": "Opportunities ranked by match score"},
        503: {"description": "Opportunity store unavailable"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_recommended(
    request: Request,
    identity: CurrentIdentity,
    limit: int = Query(10, ge=1, le=100),
    service: RecommendationService = Depends(get_recommendation_service),
) -> OpportunityMatchListResponse:
    """
    Recommend opportunities in the user's interest areas, best match first.

    Users without saved preferences get the most recent opportunities,
    unscored (`match_score` is `null`).
    """
    matches = unwrap(await service.get_recommended_opportunities(identity.id, limit=limit))
    return _list_response(matches or [], limit)


@router.get(
    "/matches",
    response_model=OpportunityMatchListResponse,
    summary="Matched opportunities",
    responses={
        200: {"description": "Recent opportunities ranked by match score"},
        503: {"description": "Opportunity store unavailable"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_matches(
    request: Request,
    identity: CurrentIdentity,
    limit: int = Query(20, ge=1, le=100),
    service: RecommendationService = Depends(get_recommendation_service),
) -> OpportunityMatchListResponse:
    """Rank the most recent opportunities across all interest areas for the user."""
    matches = unwrap(await service.get_matched_opportunities(identity.id, limit=limit))
    return _list_response(matches or [], limit)
