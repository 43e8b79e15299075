"""URL Repository for the URL shortener application.

This module provides the UrlMappingRepository class for database operations
on the urls table.
"""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortener.models.url import UrlMapping
from shortener.repositories.base import BaseRepository, DuplicateEntityError, RepositoryError


class UrlMappingRepository(BaseRepository[UrlMapping]):
    """
    Repository for UrlMapping database operations.

    Mappings are insert-only; there are no update or delete operations.
    """

    def __init__(self):
        """Initialize the repository with the UrlMapping model type."""
        super().__init__(UrlMapping)

    async def insert_mapping(self, db: AsyncSession, url_id: str, original_url: str) -> None:
        """
        Insert a new mapping row.

        The existence check is left to the primary key so that concurrent
        inserts of the same id cannot both succeed.

        Args:
            db: Database session
            url_id: Hash-derived identifier
            original_url: Destination URL

        Raises:
            DuplicateEntityError: If a row with this id already exists
            RepositoryError: On other database errors
        """
        try:
            await db.execute(
                insert(self.model_type).values(id=url_id, original_url=original_url)
            )
            await db.flush()
        except IntegrityError as e:
            raise DuplicateEntityError(self.model_type, "id", url_id) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Database error creating URL mapping: {e}") from e

    async def get_original_url(self, db: AsyncSession, url_id: str) -> Optional[str]:
        """
        Find the destination stored under ``url_id``.

        Returns:
            The original URL if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type.original_url).where(self.model_type.id == url_id)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving URL by id: {e}") from e
