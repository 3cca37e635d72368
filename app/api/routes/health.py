"""
Health check routes.
"""
from fastapi import APIRouter

from app.core.config import settings
from app.core.timezone import iso_utc

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness: 200 whenever the app is running."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "timestamp": iso_utc(),
    }
