"""Procuration participant repository interface."""

from abc import abstractmethod
from uuid import UUID

from src.domain.entities.proxy_participant import ProxyParticipant
from src.domain.repositories.base import BaseRepository
from src.domain.value_objects.proxy_status import ParticipantStatus, ParticipantType


class ProxyParticipantRepository(BaseRepository[ProxyParticipant]):
    """Repository interface for requesters and volunteers."""

    @abstractmethod
    async def get_by_type(self, type: ParticipantType) -> list[ProxyParticipant]:
        """Get every participant of a type, newest first.

        Args:
            type: requester or volunteer

        Returns:
            List of participants, disabled ones included
        """
        pass

    @abstractmethod
    async def update_status(
        self, participant_ids: list[UUID], status: ParticipantStatus
    ) -> int:
        """Set the status of several participants.

        Args:
            participant_ids: Participants to update
            status: New status

        Returns:
            Number of rows updated
        """
        pass

    @abstractmethod
    async def set_disabled(self, participant_id: UUID, disabled: bool) -> bool:
        """Toggle the disabled flag.

        Args:
            participant_id: Participant ID
            disabled: New flag value

        Returns:
            True if the participant exists and was updated
        """
        pass
