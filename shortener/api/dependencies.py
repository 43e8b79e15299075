"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the store, settings and service instances.
"""

from fastapi import Depends, Request

from shortener.core.config import Settings
from shortener.services.links import request_base_url
from shortener.services.shortener import ShortenedURLService
from shortener.stores.base import UrlStore


def get_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


def get_store(request: Request) -> UrlStore:
    """Get the store opened for the application's lifetime."""
    return request.app.state.store


async def get_shortener_service(
    store: UrlStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ShortenedURLService:
    """Get a URL shortening service scoped to the current request."""
    return ShortenedURLService(store=store, timeout=settings.STORE_TIMEOUT_SECONDS)


def get_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Get the scheme and host for shortened links."""
    return request_base_url(
        request.headers,
        request_scheme=request.url.scheme,
        request_host=request.url.netloc,
        configured_base_url=settings.BASE_URL,
    )
