"""
Main API router that includes all endpoint routers
"""
from fastapi import APIRouter

from cinestream.api.v1 import movies, analytics
from cinestream.core.config import settings

api_router = APIRouter(prefix=settings.API_V1_STR)

# Include all routers
api_router.include_router(
    movies.router,
    prefix="/movies",
    tags=["movies"]
)

api_router.include_router(
    analytics.router,
    prefix="/movies",
    tags=["analytics"]
)
