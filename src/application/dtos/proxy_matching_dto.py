"""DTOs for the procuration matching workflow."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.entities import ProxyMatch, ProxyParticipant
from src.domain.value_objects.confirm_outcome import ConfirmOutcome
from src.domain.value_objects.participant_fields import ParticipantFields
from src.domain.value_objects.proxy_status import ParticipantType, StatusFilter


PLACEHOLDER_NAME = "(inconnu)"


# =============================================================================
# Output Items
# =============================================================================


@dataclass
class ParticipantOutputItem:
    """Participant row for list views."""

    id: UUID | None
    type: str
    first_name: str
    last_name: str
    national_elector_number: str
    phone: str
    email: str
    voting_bureau: int | None
    support_committee_consent: bool
    newsletter_consent: bool
    status: str
    disabled: bool
    created_at: datetime | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_entity(cls, entity: ProxyParticipant) -> "ParticipantOutputItem":
        return cls(
            id=entity.id,
            type=entity.type.value,
            first_name=entity.first_name,
            last_name=entity.last_name,
            national_elector_number=entity.national_elector_number,
            phone=entity.phone,
            email=entity.email,
            voting_bureau=entity.voting_bureau,
            support_committee_consent=entity.support_committee_consent,
            newsletter_consent=entity.newsletter_consent,
            status=entity.status.value,
            disabled=entity.disabled,
            created_at=entity.created_at,
        )


@dataclass
class ParticipantSnapshot:
    """Participant details embedded in a match row.

    found is False when the participant could not be resolved; the names are
    then placeholders so the list still renders.
    """

    id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    national_elector_number: str | None = None
    found: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_entity(cls, entity: ProxyParticipant) -> "ParticipantSnapshot":
        assert entity.id is not None
        return cls(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            email=entity.email,
            phone=entity.phone,
            national_elector_number=entity.national_elector_number,
        )

    @classmethod
    def placeholder(cls, participant_id: UUID) -> "ParticipantSnapshot":
        return cls(
            id=participant_id,
            first_name=PLACEHOLDER_NAME,
            last_name="",
            found=False,
        )


@dataclass
class MatchOutputItem:
    """Match row with both participants embedded."""

    id: UUID | None
    status: str
    requester: ParticipantSnapshot
    volunteer: ParticipantSnapshot
    confirmed_at: datetime | None
    confirmed_by: str | None
    notified_at: datetime | None
    created_at: datetime | None

    @classmethod
    def from_entity(
        cls,
        entity: ProxyMatch,
        requester: ParticipantSnapshot,
        volunteer: ParticipantSnapshot,
    ) -> "MatchOutputItem":
        return cls(
            id=entity.id,
            status=entity.status.value,
            requester=requester,
            volunteer=volunteer,
            confirmed_at=entity.confirmed_at,
            confirmed_by=entity.confirmed_by,
            notified_at=entity.notified_at,
            created_at=entity.created_at,
        )


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class ListParticipantsInputDto:
    """Input for listing requesters or volunteers."""

    type: ParticipantType
    status_filter: StatusFilter = StatusFilter.PENDING
    include_disabled: bool = False
    search: str | None = None


@dataclass
class ProposeMatchInputDto:
    """Input for proposing a match."""

    requester_id: UUID | None
    volunteer_id: UUID | None


@dataclass
class ConfirmMatchInputDto:
    """Input for confirming a match."""

    match_id: UUID
    actor_id: str | None = None


@dataclass
class UpdateParticipantInputDto:
    """Input for editing a participant's fields."""

    participant_id: UUID
    fields: ParticipantFields


@dataclass
class RegisterParticipantInputDto:
    """Input for registering a requester or volunteer."""

    type: ParticipantType
    fields: ParticipantFields


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class ListParticipantsOutputDto:
    """Output of a participant listing."""

    participants: list[ParticipantOutputItem]
    total: int = 0


@dataclass
class ListMatchesOutputDto:
    """Output of a match listing."""

    matches: list[MatchOutputItem]


@dataclass
class ProposeMatchOutputDto:
    """Output of a proposal."""

    match: MatchOutputItem


@dataclass
class ConfirmMatchOutputDto:
    """Output of a confirmation."""

    match: MatchOutputItem
    outcome: ConfirmOutcome


@dataclass
class DissolveMatchOutputDto:
    """Output of a dissolution."""

    match_id: UUID
    reset_participant_ids: list[UUID] = field(default_factory=list)


@dataclass
class DisableParticipantOutputDto:
    """Output of disabling a participant."""

    participant_id: UUID
    dissolved_match_id: UUID | None = None
    released_participant_id: UUID | None = None


@dataclass
class RegisterParticipantOutputDto:
    """Output of a registration."""

    participant: ParticipantOutputItem
    team_notified: bool


@dataclass
class ProxyStatisticsOutputDto:
    """Dashboard counters."""

    requesters_total: int = 0
    requesters_pending: int = 0
    requesters_matched: int = 0
    requesters_disabled: int = 0
    requesters_available: int = 0
    volunteers_total: int = 0
    volunteers_pending: int = 0
    volunteers_matched: int = 0
    volunteers_disabled: int = 0
    volunteers_available: int = 0
    matches_pending: int = 0
    matches_confirmed: int = 0
