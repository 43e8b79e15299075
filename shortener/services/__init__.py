"""Service layer for the URL shortener application.

This package contains the service implementing the business logic of the application.
Services orchestrate interactions between stores and the API layer.
"""

from shortener.services.shortener import ShortenedURLService

__all__ = ["ShortenedURLService"]
