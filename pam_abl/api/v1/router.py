"""
API v1 router.
"""
from fastapi import APIRouter

from pam_abl.api.v1.endpoints import health, parse

api_router = APIRouter()

# Health check endpoint (no prefix, so it's /api/v1/health)
api_router.include_router(health.router, tags=["health"])

api_router.include_router(parse.router, prefix="/parse", tags=["parse"])
