"""
Health check endpoint for monitoring and diagnostics.
"""
import logging
from fastapi import APIRouter

from pam_abl.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        {
            "ok": true,
            "environment": "<APP_ENV>"
        }
    """
    return {
        "ok": True,
        "environment": settings.APP_ENV,
    }
