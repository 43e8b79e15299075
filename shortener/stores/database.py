"""Relational store backend on SQLAlchemy's asyncio extension."""

import asyncio
import logging
from contextlib import nullcontext
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from shortener.core.digest import Digest, derive_id
from shortener.db.base import DatabaseHealthCheck, create_tables, get_session_factory
from shortener.db.session import get_session, transaction_context
from shortener.repositories.base import DuplicateEntityError, EntityNotFoundError, RepositoryError
from shortener.repositories.url_repository import UrlMappingRepository
from shortener.stores.base import UrlStore

logger = logging.getLogger(__name__)


class SqlUrlStore(UrlStore):
    """
    Store backed by the ``urls`` table.

    Every call opens its own session from the engine's pool. Concurrent
    creation of the same URL is settled by the primary key: the losing
    insert fails with an integrity error and is reported as the existing id.
    SQLite allows a single writer, so writes through one store are queued
    on a lock instead of racing for the database lock.
    """

    backend_name = "database"

    def __init__(
        self,
        engine: AsyncEngine,
        digest: Digest = derive_id,
        repository: Optional[UrlMappingRepository] = None,
    ):
        super().__init__(digest)
        self.engine = engine
        self.session_factory = get_session_factory(engine)
        self.repository = repository or UrlMappingRepository()
        self.health_check = DatabaseHealthCheck(self.session_factory)
        self._write_lock: Optional[asyncio.Lock] = (
            asyncio.Lock() if engine.dialect.name == "sqlite" else None
        )

    async def initialize(self) -> None:
        """Create the schema and verify the database answers."""
        try:
            await create_tables(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise RepositoryError(f"Unable to prepare database: {e}") from e

    async def create(self, original_url: str) -> str:
        url_id = self.digest(original_url)
        try:
            async with self._write_lock or nullcontext():
                async with transaction_context(self.session_factory) as db:
                    await self.repository.insert_mapping(db, url_id, original_url)
        except DuplicateEntityError:
            logger.debug(f"Mapping {url_id} already exists")
        except (SQLAlchemyError, OSError) as e:
            raise RepositoryError(f"Failed to save to database: {e}") from e
        return url_id

    async def get(self, url_id: str) -> str:
        try:
            async with get_session(self.session_factory) as db:
                original_url = await self.repository.get_original_url(db, url_id)
        except (SQLAlchemyError, OSError) as e:
            raise RepositoryError(f"Error retrieving from database: {e}") from e
        if original_url is None:
            raise EntityNotFoundError(self.repository.model_type, url_id)
        return original_url

    async def count(self) -> int:
        try:
            async with get_session(self.session_factory) as db:
                return await self.repository.count(db)
        except (SQLAlchemyError, OSError) as e:
            raise RepositoryError(f"Error counting mappings: {e}") from e

    async def ping(self) -> Dict:
        return await self.health_check.check_connection()

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")
