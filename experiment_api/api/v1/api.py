"""API router configuration.

This module sets up the main API router and includes the sub-routers for
experiment lookups and link signing.
"""

from fastapi import APIRouter

from experiment_api.api.v1.experiments import router as experiments_router
from experiment_api.api.v1.links import router as links_router

api_router = APIRouter()

# Include routers
api_router.include_router(experiments_router, prefix="/experiments", tags=["experiments"])
api_router.include_router(links_router, prefix="/links", tags=["links"])
