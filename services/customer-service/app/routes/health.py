"""
Health check routes for customer service
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status
import structlog

from app.exceptions import StoreError
from app.utils.dependencies import AccountStoreDep, SettingsDep

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(settings: SettingsDep):
    """Service health check"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/database")
async def database_health_check(settings: SettingsDep, store: AccountStoreDep):
    """Store connection health check"""
    try:
        await store.ping()
    except StoreError as e:
        logger.error("Database health check failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )
    return {
        "status": "healthy",
        "database": "connected",
        "backend": settings.store_backend,
    }
