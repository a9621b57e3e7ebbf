"""Base repository implementation for infrastructure layer."""

import logging

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.base import BaseEntity
from src.domain.repositories.base import BaseRepository
from src.infrastructure.exceptions import DatabaseError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


class BaseRepositoryImpl(BaseRepository[T]):
    """Base repository implementation over raw SQL.

    Tables are created by alembic migrations and rows are read through
    text() queries, validated by a pydantic row model, then converted to
    domain entities. Every write commits immediately and rolls back on
    failure; SQLAlchemy errors surface as DatabaseError.

    Type Parameters:
        T: Domain entity type that extends BaseEntity

    Attributes:
        session: Async database session
        entity_class: Domain entity class for type conversions
        model_class: Pydantic row model class

    Note:
        Subclasses set _table_name and _columns and implement
        _dict_to_entity(), create() and update().
    """

    _table_name: str = ""
    _columns: tuple[str, ...] = ()
    _order_by: str = "created_at DESC, id"

    def __init__(
        self,
        session: AsyncSession,
        entity_class: type[T],
        model_class: type[Any],
    ):
        self.session = session
        self.entity_class = entity_class
        self.model_class = model_class

    @property
    def _select_columns(self) -> str:
        return ", ".join(self._columns) if self._columns else "*"

    @staticmethod
    def _row_to_dict(row: Any) -> dict[str, Any]:
        """Convert a result row to a plain dict."""
        if hasattr(row, "_asdict"):
            return row._asdict()  # type: ignore[attr-defined]
        if hasattr(row, "_mapping"):
            return dict(row._mapping)  # type: ignore[attr-defined]
        return dict(row)

    def _raw_row_to_entity(self, row: Any) -> T:
        """Validate a row through the row model and convert it to an entity."""
        model = self.model_class(**self._row_to_dict(row))
        return self._dict_to_entity(model.model_dump())

    async def _fetch_all(
        self, sql: str, params: dict[str, Any] | None, action: str
    ) -> list[T]:
        try:
            result = await self.session.execute(text(sql), params or {})
            return [self._raw_row_to_entity(row) for row in result.fetchall()]
        except SQLAlchemyError as e:
            logger.error(f"Database error {action}: {e}")
            raise DatabaseError(
                f"Failed {action}", {"params": str(params), "error": str(e)}
            ) from e

    async def _fetch_one(
        self, sql: str, params: dict[str, Any] | None, action: str
    ) -> T | None:
        try:
            result = await self.session.execute(text(sql), params or {})
            row = result.first()
            return self._raw_row_to_entity(row) if row else None
        except SQLAlchemyError as e:
            logger.error(f"Database error {action}: {e}")
            raise DatabaseError(
                f"Failed {action}", {"params": str(params), "error": str(e)}
            ) from e

    async def _execute_write(
        self, sql: str, params: dict[str, Any], action: str
    ) -> Any:
        """Execute a write statement and commit it."""
        try:
            result = await self.session.execute(text(sql), params)
            await self.session.commit()
            return result
        except SQLAlchemyError as e:
            logger.error(f"Database error {action}: {e}")
            await self.session.rollback()
            raise DatabaseError(
                f"Failed {action}", {"params": str(params), "error": str(e)}
            ) from e

    async def get_by_id(self, entity_id: UUID) -> T | None:
        """Get entity by ID."""
        return await self._fetch_one(
            f"SELECT {self._select_columns} FROM {self._table_name} WHERE id = :id",
            {"id": entity_id},
            f"getting {self._table_name} row by ID",
        )

    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """Get all entities with optional pagination, newest first."""
        sql = (
            f"SELECT {self._select_columns} FROM {self._table_name} "
            f"ORDER BY {self._order_by}"
        )
        params: dict[str, Any] = {}
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params = {"limit": limit, "offset": offset or 0}
        return await self._fetch_all(sql, params, f"getting all {self._table_name}")

    async def delete(self, entity_id: UUID) -> bool:
        """Delete an entity by ID."""
        result = await self._execute_write(
            f"DELETE FROM {self._table_name} WHERE id = :id",
            {"id": entity_id},
            f"deleting {self._table_name} row",
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count(self) -> int:
        """Count total number of entities."""
        try:
            result = await self.session.execute(
                text(f"SELECT COUNT(*) FROM {self._table_name}")
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error counting {self._table_name}: {e}")
            raise DatabaseError(
                f"Failed counting {self._table_name}", {"error": str(e)}
            ) from e
        count = result.scalar()
        return count if count is not None else 0

    def _dict_to_entity(self, data: dict[str, Any]) -> T:
        """Convert a row dict to a domain entity."""
        raise NotImplementedError("Subclass must implement _dict_to_entity")
