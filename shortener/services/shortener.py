"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class which implements the
shorten and resolve operations on top of a UrlStore.
"""

import asyncio
import logging
from typing import Optional

from shortener.repositories.base import EntityNotFoundError, RepositoryError
from shortener.services.exceptions import StorageUnavailableError, URLNotFoundError
from shortener.stores.base import UrlStore

logger = logging.getLogger(__name__)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    One instance serves one request: it carries that request's storage
    timeout into every store call. Storage failures are logged here with
    their details and surfaced as StorageUnavailableError, whose message
    is safe to show to clients.
    """

    def __init__(self, store: UrlStore, timeout: Optional[float] = None):
        """
        Initialize the URL shortening service.

        Args:
            store: The application's URL store
            timeout: Seconds allowed for a single store call, None for no limit
        """
        self.store = store
        self.timeout = timeout

    async def shorten(self, original_url: str) -> str:
        """
        Store ``original_url`` and return its id.

        Shortening the same URL again returns the same id.

        Raises:
            StorageUnavailableError: If the store fails or times out
        """
        try:
            url_id = await asyncio.wait_for(self.store.create(original_url), self.timeout)
        except RepositoryError as e:
            logger.error(f"Error creating URL: {e}")
            raise StorageUnavailableError("Internal server error") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out creating URL after {self.timeout}s")
            raise StorageUnavailableError("Internal server error") from e

        logger.info(f"Shortened URL to id {url_id}")
        return url_id

    async def resolve(self, url_id: str) -> str:
        """
        Look up the original URL for ``url_id``.

        Raises:
            URLNotFoundError: If no mapping exists for the id
            StorageUnavailableError: If the store fails or times out
        """
        try:
            return await asyncio.wait_for(self.store.get(url_id), self.timeout)
        except EntityNotFoundError as e:
            raise URLNotFoundError(f"URL not found for ID: {url_id}") from e
        except RepositoryError as e:
            logger.error(f"Error retrieving URL {url_id}: {e}")
            raise StorageUnavailableError("Internal server error") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out retrieving URL {url_id} after {self.timeout}s")
            raise StorageUnavailableError("Internal server error") from e
