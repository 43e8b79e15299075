"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Generic, Type, TypeVar
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class EntityNotFoundError(RepositoryError):
    """Exception raised when an entity cannot be found."""

    def __init__(self, model_type: Type[SQLModel], entity_id: Any):
        self.model_type = model_type
        self.entity_id = entity_id
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with id {entity_id} not found")


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


class BaseRepository(Generic[T]):
    """
    Base repository implementing the read operations shared by SQLModel entities.

    Type parameters:
        T: The SQLModel type this repository manages
    """

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    async def count(self, db: AsyncSession) -> int:
        """
        Count the total number of entities.

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(func.count()).select_from(self.model_type)
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e

