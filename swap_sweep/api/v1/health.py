"""
Health Check Endpoints
"""
from fastapi import APIRouter
from datetime import datetime, timezone

from ..schemas import HealthCheckResponse
from ...config import settings

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint

    Returns the current health status of the API.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
        timestamp=datetime.now(timezone.utc)
    )
