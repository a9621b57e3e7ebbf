"""Procuration match entity."""

from datetime import datetime
from uuid import UUID

from src.domain.entities.base import BaseEntity
from src.domain.exceptions import ConflictError
from src.domain.value_objects.proxy_status import MatchStatus


class ProxyMatch(BaseEntity):
    """A pairing of one requester with one volunteer.

    Created pending by an administrator, confirmed once both parties have
    received each other's contact details. There is no way back from
    confirmed to pending; a match is dissolved by deleting it.
    """

    def __init__(
        self,
        requester_id: UUID,
        volunteer_id: UUID,
        status: MatchStatus | str = MatchStatus.PENDING,
        confirmed_at: datetime | None = None,
        confirmed_by: str | None = None,
        notified_at: datetime | None = None,
        created_at: datetime | None = None,
        id: UUID | None = None,
    ) -> None:
        """Initialize a match.

        Args:
            requester_id: Requester participant ID
            volunteer_id: Volunteer participant ID
            status: pending or confirmed
            confirmed_at: When the match was confirmed
            confirmed_by: Identity of the confirming administrator
            notified_at: When the contact emails were dispatched
            created_at: Creation timestamp
            id: Match ID
        """
        super().__init__(id)
        self.requester_id = requester_id
        self.volunteer_id = volunteer_id
        self.status = MatchStatus(status)
        self.confirmed_at = confirmed_at
        self.confirmed_by = confirmed_by
        self.notified_at = notified_at
        self.created_at = created_at

    def __str__(self) -> str:
        return (
            f"ProxyMatch(requester_id={self.requester_id}, "
            f"volunteer_id={self.volunteer_id}, "
            f"status={self.status.value})"
        )

    @property
    def is_active(self) -> bool:
        """Whether the match holds its participants."""
        return self.status in MatchStatus.active()

    @property
    def is_confirmed(self) -> bool:
        return self.status is MatchStatus.CONFIRMED

    @property
    def participant_ids(self) -> tuple[UUID, UUID]:
        return (self.requester_id, self.volunteer_id)

    def involves(self, participant_id: UUID) -> bool:
        return participant_id in self.participant_ids

    def other_participant_id(self, participant_id: UUID) -> UUID:
        """Return the participant on the other side of the match."""
        if participant_id == self.requester_id:
            return self.volunteer_id
        if participant_id == self.volunteer_id:
            return self.requester_id
        raise ValueError(f"Participant {participant_id} is not part of {self}")

    def confirm(self, confirmed_by: str | None, confirmed_at: datetime) -> None:
        """Move the match to confirmed.

        Raises:
            ConflictError: If the match is already confirmed
        """
        if self.is_confirmed:
            raise ConflictError(
                "Ce binôme est déjà confirmé", {"match_id": str(self.id)}
            )
        self.status = MatchStatus.CONFIRMED
        self.confirmed_at = confirmed_at
        self.confirmed_by = confirmed_by
        if self.notified_at is None:
            self.notified_at = confirmed_at
