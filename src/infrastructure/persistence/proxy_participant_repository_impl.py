"""Procuration participant repository implementation using SQLAlchemy."""

import logging

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import bindparam, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.proxy_participant import ProxyParticipant
from src.domain.exceptions import ConflictError
from src.domain.repositories.proxy_participant_repository import (
    ProxyParticipantRepository,
)
from src.domain.value_objects.proxy_status import ParticipantStatus, ParticipantType
from src.infrastructure.exceptions import DatabaseError, UpdateError
from src.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class ProxyRequestModel(PydanticBaseModel):
    """proxy_requests row model."""

    id: UUID | None = None
    type: str
    first_name: str
    last_name: str
    national_elector_number: str
    phone: str
    email: str
    voting_bureau: int | None = None
    support_committee_consent: bool = True
    newsletter_consent: bool = True
    status: str = ParticipantStatus.PENDING.value
    disabled: bool | None = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProxyParticipantRepositoryImpl(
    BaseRepositoryImpl[ProxyParticipant], ProxyParticipantRepository
):
    """Participant repository over the proxy_requests table."""

    _table_name = "proxy_requests"
    _columns = (
        "id",
        "type",
        "first_name",
        "last_name",
        "national_elector_number",
        "phone",
        "email",
        "voting_bureau",
        "support_committee_consent",
        "newsletter_consent",
        "status",
        "disabled",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=ProxyParticipant,
            model_class=ProxyRequestModel,
        )

    async def get_by_type(self, type: ParticipantType) -> list[ProxyParticipant]:
        """Get every participant of a type, newest first."""
        return await self._fetch_all(
            f"""
                SELECT {self._select_columns}
                FROM proxy_requests
                WHERE type = :type
                ORDER BY created_at DESC, id
            """,
            {"type": ParticipantType(type).value},
            "getting proxy participants by type",
        )

    async def create(self, entity: ProxyParticipant) -> ProxyParticipant:
        """Insert a participant.

        Raises:
            ConflictError: A participant of the same type already uses this
                national elector number
        """
        query = text(f"""
            INSERT INTO proxy_requests (
                type, first_name, last_name, national_elector_number,
                phone, email, voting_bureau,
                support_committee_consent, newsletter_consent,
                status, disabled, created_at, updated_at
            )
            VALUES (
                :type, :first_name, :last_name, :national_elector_number,
                :phone, :email, :voting_bureau,
                :support_committee_consent, :newsletter_consent,
                :status, :disabled, :created_at, :updated_at
            )
            RETURNING {self._select_columns}
        """)
        now = datetime.now()
        params = {
            **self._field_params(entity),
            "type": entity.type.value,
            "status": entity.status.value,
            "disabled": entity.disabled,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.session.execute(query, params)
            row = result.first()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Duplicate proxy participant rejected: {e}")
            raise ConflictError(
                "Une inscription existe déjà avec ce numéro national d'électeur",
                {"national_elector_number": entity.national_elector_number},
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating proxy participant: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create proxy participant",
                {"entity": str(entity), "error": str(e)},
            ) from e

        if row is None:
            raise DatabaseError("Failed to create proxy participant")
        return self._raw_row_to_entity(row)

    async def update(self, entity: ProxyParticipant) -> ProxyParticipant:
        """Update a participant's editable fields.

        Type is never written; status and disabled have dedicated methods.
        """
        if entity.id is None:
            raise ValueError("Entity must have an ID to update")

        query = text(f"""
            UPDATE proxy_requests
            SET first_name = :first_name,
                last_name = :last_name,
                national_elector_number = :national_elector_number,
                phone = :phone,
                email = :email,
                voting_bureau = :voting_bureau,
                support_committee_consent = :support_committee_consent,
                newsletter_consent = :newsletter_consent,
                updated_at = :updated_at
            WHERE id = :id
            RETURNING {self._select_columns}
        """)
        params = {
            **self._field_params(entity),
            "id": entity.id,
            "updated_at": datetime.now(),
        }
        try:
            result = await self.session.execute(query, params)
            row = result.first()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Duplicate proxy participant rejected: {e}")
            raise ConflictError(
                "Une inscription existe déjà avec ce numéro national d'électeur",
                {"national_elector_number": entity.national_elector_number},
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error updating proxy participant: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed updating proxy participant",
                {"entity": str(entity), "error": str(e)},
            ) from e

        if row is None:
            raise UpdateError(f"ProxyParticipant with ID {entity.id} not found")
        return self._raw_row_to_entity(row)

    async def update_status(
        self, participant_ids: list[UUID], status: ParticipantStatus
    ) -> int:
        """Set the status of several participants."""
        if not participant_ids:
            return 0
        query = text("""
            UPDATE proxy_requests
            SET status = :status, updated_at = :updated_at
            WHERE id IN :ids
        """).bindparams(bindparam("ids", expanding=True))
        params = {
            "status": ParticipantStatus(status).value,
            "updated_at": datetime.now(),
            "ids": list(participant_ids),
        }
        try:
            result = await self.session.execute(query, params)
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error updating proxy participant status: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to update proxy participant status",
                {"ids": [str(i) for i in participant_ids], "error": str(e)},
            ) from e
        return result.rowcount  # type: ignore[attr-defined]

    async def set_disabled(self, participant_id: UUID, disabled: bool) -> bool:
        """Toggle the disabled flag."""
        result = await self._execute_write(
            """
                UPDATE proxy_requests
                SET disabled = :disabled, updated_at = :updated_at
                WHERE id = :id
            """,
            {"id": participant_id, "disabled": disabled, "updated_at": datetime.now()},
            "toggling proxy participant disabled flag",
        )
        return result.rowcount > 0  # type: ignore[attr-defined]

    @staticmethod
    def _field_params(entity: ProxyParticipant) -> dict[str, Any]:
        return {
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "national_elector_number": entity.national_elector_number,
            "phone": entity.phone,
            "email": entity.email,
            "voting_bureau": entity.voting_bureau,
            "support_committee_consent": entity.support_committee_consent,
            "newsletter_consent": entity.newsletter_consent,
        }

    def _dict_to_entity(self, data: dict[str, Any]) -> ProxyParticipant:
        """Convert dictionary to entity.

        The disabled column is nullable; NULL reads as enabled.
        """
        return ProxyParticipant(
            id=data.get("id"),
            type=data["type"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            national_elector_number=data["national_elector_number"],
            phone=data["phone"],
            email=data["email"],
            voting_bureau=data.get("voting_bureau"),
            support_committee_consent=bool(data.get("support_committee_consent")),
            newsletter_consent=bool(data.get("newsletter_consent")),
            status=data.get("status") or ParticipantStatus.PENDING,
            disabled=bool(data.get("disabled") or False),
            created_at=data.get("created_at"),
        )
