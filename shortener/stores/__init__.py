"""Storage backends for URL mappings.

``open_store`` builds the backend selected in settings and releases it on
exit, so the application owns exactly one store per process lifetime.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from shortener.core.config import Settings, StoreBackend
from shortener.db.base import get_engine
from shortener.stores.base import UrlStore
from shortener.stores.database import SqlUrlStore
from shortener.stores.memory import InMemoryUrlStore

logger = logging.getLogger(__name__)


def build_store(config: Settings) -> UrlStore:
    """Construct, without connecting, the store selected by ``STORE_BACKEND``."""
    if config.STORE_BACKEND == StoreBackend.MEMORY:
        return InMemoryUrlStore()
    if not config.DATABASE_URL:
        raise ValueError("DATABASE_URL environment variable is not set")
    return SqlUrlStore(get_engine(config.DATABASE_URL, config))


@asynccontextmanager
async def open_store(config: Settings) -> AsyncGenerator[UrlStore, None]:
    """Build the configured store, prepare it and close it on exit."""
    store = build_store(config)
    try:
        if isinstance(store, SqlUrlStore):
            await store.initialize()
        logger.info(f"Using {store.backend_name} store")
        yield store
    finally:
        await store.close()


__all__ = [
    "UrlStore",
    "InMemoryUrlStore",
    "SqlUrlStore",
    "build_store",
    "open_store",
]
