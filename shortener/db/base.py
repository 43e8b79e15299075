"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Schema creation
- Health check functionality
"""

from typing import Dict, Optional
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortener.core.config import EnvironmentType, Settings
# Registers the urls table on SQLModel.metadata
from shortener.models.url import UrlMapping  # noqa: F401

logger = logging.getLogger(__name__)


def get_engine_config(database_url: str, config: Settings) -> Dict:
    """Get the engine configuration for the given URL and environment.

    SQLite engines keep SQLAlchemy's default pool and wait up to
    SQLITE_BUSY_TIMEOUT for a locked database; pool sizing only applies to
    server databases.

    Returns:
        Dict: Engine configuration parameters.
    """
    is_sqlite = make_url(database_url).get_backend_name() == "sqlite"

    if config.ENVIRONMENT == EnvironmentType.TESTING:
        engine_config = {"echo": False, "poolclass": NullPool}
    elif is_sqlite:
        engine_config = {"echo": config.DB_ECHO}
    else:
        return {
            "echo": config.DB_ECHO,
            "pool_size": config.DB_POOL_SIZE,
            "max_overflow": config.DB_POOL_MAX_OVERFLOW,
            "pool_timeout": config.DB_POOL_TIMEOUT,
            "pool_recycle": config.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        }

    if is_sqlite:
        engine_config["connect_args"] = {"timeout": config.SQLITE_BUSY_TIMEOUT}
    return engine_config


def get_engine(database_url: str, config: Settings) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_config = get_engine_config(database_url, config)

    logger.info(
        f"Creating database engine for {make_url(database_url).render_as_string(hide_password=True)}"
    )

    return create_async_engine(database_url, **engine_config)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create the urls table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Table 'urls' is ready")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def check_connection(self) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message: Optional[str] = None
        latency_ms = 0

        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
