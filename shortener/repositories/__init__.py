"""Repository layer for the URL shortener application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from shortener.repositories.base import (
    BaseRepository,
    RepositoryError,
    EntityNotFoundError,
    DuplicateEntityError
)
from shortener.repositories.url_repository import UrlMappingRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "EntityNotFoundError",
    "DuplicateEntityError",

    # Concrete repositories
    "UrlMappingRepository",
]
