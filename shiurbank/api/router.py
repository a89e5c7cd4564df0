"""API router aggregation.

Includes all endpoint modules with their prefix and tags. All routes use
dependencies from shiurbank.api.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from shiurbank.api.endpoints import (
    admin,
    audio,
    auth,
    catalog,
    health,
    participants,
    participation,
    recordings,
    search,
    series,
    subscriptions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/api", tags=["auth"])
api_router.include_router(catalog.router, prefix="/api", tags=["catalog"])
api_router.include_router(series.router, prefix="/api", tags=["series"])
api_router.include_router(
    participation.router, prefix="/api/series", tags=["participant-approval"]
)
api_router.include_router(
    participants.router, prefix="/api/series", tags=["participant-management"]
)
api_router.include_router(recordings.router, prefix="/api", tags=["recordings"])
api_router.include_router(audio.router, prefix="/api/audio", tags=["audio"])
api_router.include_router(
    subscriptions.router, prefix="/api/subscription", tags=["subscriptions"]
)
api_router.include_router(search.router, prefix="/api/search", tags=["search"])
api_router.include_router(admin.router, prefix="/api/admin", tags=["admin"])
