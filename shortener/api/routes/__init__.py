"""Routes package initialization.

This module assembles the route collection for the application.
"""

from fastapi import APIRouter

from shortener.api.routes import shortener, redirect, health
from shortener.core.config import Settings


def build_api_router(config: Settings) -> APIRouter:
    """Create the root router with short links served under the redirect prefix."""
    api_router = APIRouter()

    # Welcome page and health checks
    api_router.include_router(health.router)

    # POST /shorten
    api_router.include_router(shortener.router)

    # GET /<prefix>/<id>
    api_router.include_router(
        redirect.router,
        prefix=f"/{config.REDIRECT_PREFIX}"
    )

    return api_router


__all__ = ["build_api_router"]
