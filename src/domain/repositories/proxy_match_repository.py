"""Procuration match repository interface."""

from abc import abstractmethod
from datetime import datetime
from uuid import UUID

from src.domain.entities.proxy_match import ProxyMatch
from src.domain.repositories.base import BaseRepository


class ProxyMatchRepository(BaseRepository[ProxyMatch]):
    """Repository interface for matches."""

    @abstractmethod
    async def get_active_by_participant_id(
        self, participant_id: UUID
    ) -> ProxyMatch | None:
        """Get the pending or confirmed match referencing a participant.

        Args:
            participant_id: Requester or volunteer ID

        Returns:
            The active match, or None
        """
        pass

    @abstractmethod
    async def mark_notified(self, match_id: UUID, notified_at: datetime) -> bool:
        """Record that the contact emails of a match were dispatched.

        Args:
            match_id: Match ID
            notified_at: Dispatch timestamp

        Returns:
            True if the match exists and was updated
        """
        pass
