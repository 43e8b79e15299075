"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
"""

from typing import AsyncGenerator
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def get_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Get async session with proper cleanup.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@asynccontextmanager
async def transaction_context(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for a database session with transaction support.

    Automatically commits on successful completion or rolls back on error.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with transaction_context(session_factory) as session:
            await session.execute(insert(UrlMapping).values(id=url_id, original_url=url))
            # Commits automatically on context exit if no errors
        ```
    """
    async with get_session(session_factory) as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.debug(f"Transaction rolled back: {e!r}")
            raise
