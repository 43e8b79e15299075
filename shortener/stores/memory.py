"""In-memory store backend."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict

from shortener.core.digest import Digest, derive_id
from shortener.repositories.base import EntityNotFoundError
from shortener.models.url import UrlMapping, UrlMappingRead
from shortener.stores.base import UrlStore

logger = logging.getLogger(__name__)


class InMemoryUrlStore(UrlStore):
    """
    Dict-backed store for development and tests.

    All access to the table goes through one ``asyncio.Lock`` so a check
    and the following insert can't interleave with another request.
    Contents are lost when the process exits.
    """

    backend_name = "memory"

    def __init__(self, digest: Digest = derive_id):
        super().__init__(digest)
        self._mappings: Dict[str, UrlMappingRead] = {}
        self._lock = asyncio.Lock()

    async def create(self, original_url: str) -> str:
        url_id = self.digest(original_url)
        async with self._lock:
            if url_id not in self._mappings:
                self._mappings[url_id] = UrlMappingRead(
                    id=url_id,
                    original_url=original_url,
                    created_at=datetime.now(timezone.utc),
                )
                logger.debug(f"Stored mapping {url_id}")
        return url_id

    async def get(self, url_id: str) -> str:
        async with self._lock:
            mapping = self._mappings.get(url_id)
        if mapping is None:
            raise EntityNotFoundError(UrlMapping, url_id)
        return mapping.original_url

    async def count(self) -> int:
        async with self._lock:
            return len(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)
