"""Welcome and health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, Response, status

from shortener.api.dependencies import get_settings, get_store
from shortener.core.config import Settings
from shortener.stores.base import UrlStore

router = APIRouter(tags=["health"])


@router.get("/", summary="Welcome message")
async def welcome(settings: Settings = Depends(get_settings)):
    return {"message": f"Welcome to {settings.APP_NAME}. POST a URL to /shorten to get a short link."}


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(
    store: UrlStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Check health of the store."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {},
    }

    store_status = await store.ping()
    store_status["backend"] = store.backend_name
    health_status["components"]["store"] = store_status
    if store_status["status"] != "healthy":
        health_status["status"] = "degraded"

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(response: Response, store: UrlStore = Depends(get_store)):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "store": False}

    store_status = await store.ping()
    components_status["store"] = store_status["status"] == "healthy"

    is_ready = all(components_status.values())
    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "ready": is_ready,
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
