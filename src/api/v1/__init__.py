"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.activities import router as activities_router
from api.v1.routes.opportunities import router as opportunities_router
from api.v1.routes.preferences import router as preferences_router
from api.v1.routes.profile import router as profile_router

router = APIRouter()
router.include_router(profile_router)
router.include_router(preferences_router)
router.include_router(opportunities_router)
router.include_router(activities_router)
