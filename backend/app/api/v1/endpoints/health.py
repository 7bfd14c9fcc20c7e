"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(app_settings: Settings = Depends(get_settings)):
    """Basic health check with provider availability."""
    return {
        "status": "ok",
        "visibility_enabled": app_settings.visibility_enabled
    }
