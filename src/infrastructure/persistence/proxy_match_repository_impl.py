"""Procuration match repository implementation using SQLAlchemy."""

import logging

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.proxy_match import ProxyMatch
from src.domain.exceptions import ConflictError
from src.domain.repositories.proxy_match_repository import ProxyMatchRepository
from src.domain.value_objects.proxy_status import MatchStatus
from src.infrastructure.exceptions import DatabaseError, UpdateError
from src.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class ProxyMatchModel(PydanticBaseModel):
    """proxy_matches row model."""

    id: UUID | None = None
    requester_id: UUID
    volunteer_id: UUID
    status: str = MatchStatus.PENDING.value
    confirmed_at: datetime | None = None
    confirmed_by: str | None = None
    notified_at: datetime | None = None
    created_at: datetime | None = None


class ProxyMatchRepositoryImpl(BaseRepositoryImpl[ProxyMatch], ProxyMatchRepository):
    """Match repository over the proxy_matches table."""

    _table_name = "proxy_matches"
    _columns = (
        "id",
        "requester_id",
        "volunteer_id",
        "status",
        "confirmed_at",
        "confirmed_by",
        "notified_at",
        "created_at",
    )

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=ProxyMatch,
            model_class=ProxyMatchModel,
        )

    async def get_active_by_participant_id(
        self, participant_id: UUID
    ) -> ProxyMatch | None:
        """Get the pending or confirmed match referencing a participant."""
        return await self._fetch_one(
            f"""
                SELECT {self._select_columns}
                FROM proxy_matches
                WHERE (requester_id = :participant_id
                       OR volunteer_id = :participant_id)
                  AND status IN ('pending', 'confirmed')
                ORDER BY created_at DESC
                LIMIT 1
            """,
            {"participant_id": participant_id},
            "getting active proxy match by participant",
        )

    async def create(self, entity: ProxyMatch) -> ProxyMatch:
        """Insert a match.

        Raises:
            ConflictError: The partial unique indexes reject a second active
                match for one of the participants
        """
        query = text(f"""
            INSERT INTO proxy_matches (
                requester_id, volunteer_id, status,
                confirmed_at, confirmed_by, notified_at, created_at
            )
            VALUES (
                :requester_id, :volunteer_id, :status,
                :confirmed_at, :confirmed_by, :notified_at, :created_at
            )
            RETURNING {self._select_columns}
        """)
        params = {
            "requester_id": entity.requester_id,
            "volunteer_id": entity.volunteer_id,
            "status": entity.status.value,
            "confirmed_at": entity.confirmed_at,
            "confirmed_by": entity.confirmed_by,
            "notified_at": entity.notified_at,
            "created_at": datetime.now(),
        }
        try:
            result = await self.session.execute(query, params)
            row = result.first()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Concurrent proxy match rejected by the store: {e}")
            raise ConflictError(
                "Une des deux personnes fait déjà partie d'un binôme",
                {
                    "requester_id": str(entity.requester_id),
                    "volunteer_id": str(entity.volunteer_id),
                },
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating proxy match: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create proxy match",
                {"entity": str(entity), "error": str(e)},
            ) from e

        if row is None:
            raise DatabaseError("Failed to create proxy match")
        return self._raw_row_to_entity(row)

    async def update(self, entity: ProxyMatch) -> ProxyMatch:
        """Update a match's status and confirmation fields."""
        if entity.id is None:
            raise ValueError("Entity must have an ID to update")

        result = await self._execute_write(
            f"""
                UPDATE proxy_matches
                SET status = :status,
                    confirmed_at = :confirmed_at,
                    confirmed_by = :confirmed_by,
                    notified_at = :notified_at
                WHERE id = :id
                RETURNING {self._select_columns}
            """,
            {
                "id": entity.id,
                "status": entity.status.value,
                "confirmed_at": entity.confirmed_at,
                "confirmed_by": entity.confirmed_by,
                "notified_at": entity.notified_at,
            },
            "updating proxy match",
        )
        row = result.first()
        if row is None:
            raise UpdateError(f"ProxyMatch with ID {entity.id} not found")
        return self._raw_row_to_entity(row)

    async def mark_notified(self, match_id: UUID, notified_at: datetime) -> bool:
        """Record that the contact emails of a match were dispatched."""
        result = await self._execute_write(
            "UPDATE proxy_matches SET notified_at = :notified_at WHERE id = :id",
            {"id": match_id, "notified_at": notified_at},
            "marking proxy match notified",
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    def _dict_to_entity(self, data: dict[str, Any]) -> ProxyMatch:
        """Convert dictionary to entity."""
        return ProxyMatch(
            id=data.get("id"),
            requester_id=data["requester_id"],
            volunteer_id=data["volunteer_id"],
            status=data.get("status") or MatchStatus.PENDING,
            confirmed_at=data.get("confirmed_at"),
            confirmed_by=data.get("confirmed_by"),
            notified_at=data.get("notified_at"),
            created_at=data.get("created_at"),
        )
