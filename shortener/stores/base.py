"""Store abstraction shared by the in-memory and relational backends."""

from abc import ABC, abstractmethod
from typing import Dict

from shortener.core.digest import Digest, derive_id


class UrlStore(ABC):
    """
    Owner of the id -> original URL table.

    ``create`` derives the id from the URL and keeps the first mapping
    written under that id: a repeat (or a colliding URL) gets the existing
    id back and the stored URL is left untouched. ``get`` raises
    ``EntityNotFoundError`` for unknown ids and ``RepositoryError`` when
    the backend cannot be reached.
    """

    backend_name = "abstract"

    def __init__(self, digest: Digest = derive_id):
        self.digest = digest

    @abstractmethod
    async def create(self, original_url: str) -> str:
        """Store ``original_url`` (if new) and return its id."""

    @abstractmethod
    async def get(self, url_id: str) -> str:
        """Return the original URL stored under ``url_id``."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored mappings."""

    async def ping(self) -> Dict:
        """Report whether the backend is reachable."""
        return {"status": "healthy", "latency_ms": 0, "error": None}

    async def close(self) -> None:
        """Release resources held by the store."""
