"""Base repository interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID

from src.domain.entities.base import BaseEntity


T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """Generic CRUD interface implemented by every repository."""

    @abstractmethod
    async def get_by_id(self, entity_id: UUID) -> T | None:
        """Get an entity by ID, or None when it does not exist."""
        pass

    @abstractmethod
    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """Get all entities, newest first."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Insert an entity and return it with its generated fields."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update an existing entity."""
        pass

    @abstractmethod
    async def delete(self, entity_id: UUID) -> bool:
        """Delete an entity by ID.

        Returns:
            True if a row was deleted, False if none matched
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count entities."""
        pass
