"""Test utilities for URL shortener tests."""

import asyncio
import random
import string

from shortener.models.url import UrlMapping
from shortener.repositories.base import RepositoryError
from shortener.stores.base import UrlStore


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_mapping(db, url_id: str, original_url: str = None) -> UrlMapping:
    """Create and persist a test UrlMapping in the database."""
    mapping = UrlMapping(id=url_id, original_url=original_url or random_url())
    db.add(mapping)
    await db.flush()
    await db.refresh(mapping)
    return mapping


class FailingStore(UrlStore):
    """Store whose backend is always unreachable."""

    backend_name = "failing"

    async def create(self, original_url: str) -> str:
        raise RepositoryError("connection refused by db.internal:5432")

    async def get(self, url_id: str) -> str:
        raise RepositoryError("connection refused by db.internal:5432")

    async def count(self) -> int:
        raise RepositoryError("connection refused by db.internal:5432")

    async def ping(self):
        return {"status": "unhealthy", "latency_ms": 0, "error": "connection refused"}


class SlowStore(UrlStore):
    """Store that never answers within a short timeout."""

    backend_name = "slow"

    def __init__(self, delay: float = 1.0):
        super().__init__()
        self.delay = delay

    async def create(self, original_url: str) -> str:
        await asyncio.sleep(self.delay)
        return self.digest(original_url)

    async def get(self, url_id: str) -> str:
        await asyncio.sleep(self.delay)
        return "https://example.com"

    async def count(self) -> int:
        return 0
