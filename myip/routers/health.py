"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime, timezone

from myip.config import settings
from myip.application.fetch_service import FetchService
from myip.dependencies import get_cache_store, get_fetch_service
from myip.services.cache.cache_store import RegistryCacheStore

router = APIRouter()

@router.get("/health")
async def health_check(service: FetchService = Depends(get_fetch_service)) -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "rdap_enabled": service.lookup_enabled,
    }

@router.get("/health/store")
async def store_health(
    store: RegistryCacheStore = Depends(get_cache_store)
) -> Dict[str, Any]:
    """
    Check key-value store health.
    Pings the backend holding cached registry data and call counters.
    """
    try:
        await store.ping()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "store_type": settings.STORE_TYPE,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "store_type": settings.STORE_TYPE,
            "error": str(e)
        }
