"""Procuration participant entity."""

from datetime import datetime
from uuid import UUID

from src.domain.entities.base import BaseEntity
from src.domain.exceptions import ValidationError
from src.domain.value_objects.participant_fields import ParticipantFields
from src.domain.value_objects.proxy_contact import ProxyContact
from src.domain.value_objects.proxy_status import ParticipantStatus, ParticipantType


class ProxyParticipant(BaseEntity):
    """A person registered in the procuration workflow.

    A requester (mandant) looks for someone to vote in their name, a volunteer
    (mandataire) offers to hold a mandate. The type is fixed at creation;
    status is moved only by match events and disabled participants never
    show up as available for matching.
    """

    VALID_VOTING_BUREAUS: tuple[int, ...] = (1, 2, 3)

    def __init__(
        self,
        type: ParticipantType | str,
        first_name: str,
        last_name: str,
        national_elector_number: str,
        phone: str,
        email: str,
        voting_bureau: int | None = None,
        support_committee_consent: bool = True,
        newsletter_consent: bool = True,
        status: ParticipantStatus | str = ParticipantStatus.PENDING,
        disabled: bool = False,
        created_at: datetime | None = None,
        id: UUID | None = None,
    ) -> None:
        """Initialize a participant.

        Args:
            type: requester or volunteer
            first_name: First name
            last_name: Last name
            national_elector_number: National elector identifier (NNE)
            phone: Phone number
            email: Email address
            voting_bureau: Voting bureau number, if known
            support_committee_consent: Opted in to the support committee
            newsletter_consent: Opted in to the newsletter
            status: pending or matched
            disabled: Excluded from matching by an administrator
            created_at: Creation timestamp
            id: Participant ID
        """
        super().__init__(id)
        self._type = ParticipantType(type)
        self.first_name = first_name
        self.last_name = last_name
        self.national_elector_number = national_elector_number
        self.phone = phone
        self.email = email
        self.voting_bureau = voting_bureau
        self.support_committee_consent = support_committee_consent
        self.newsletter_consent = newsletter_consent
        self.status = ParticipantStatus(status)
        self.disabled = disabled
        self.created_at = created_at

    @property
    def type(self) -> ParticipantType:
        return self._type

    @type.setter
    def type(self, value: ParticipantType | str) -> None:
        if ParticipantType(value) is not self._type:
            raise ValidationError(
                "Le type d'une personne ne peut pas être modifié",
                {"id": str(self.id), "type": self._type.value},
            )

    def __str__(self) -> str:
        return f"ProxyParticipant({self._type.value}, {self.full_name})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_requester(self) -> bool:
        return self._type is ParticipantType.REQUESTER

    @property
    def is_volunteer(self) -> bool:
        return self._type is ParticipantType.VOLUNTEER

    @property
    def is_matched(self) -> bool:
        return self.status is ParticipantStatus.MATCHED

    def is_available_for_matching(self, active_participant_ids: set[UUID]) -> bool:
        """Whether the participant can be proposed in a new match.

        Args:
            active_participant_ids: IDs referenced by pending or confirmed matches

        Returns:
            True if the participant is enabled and not held by an active match
        """
        return not self.disabled and self.id not in active_participant_ids

    def apply_fields(self, fields: ParticipantFields) -> None:
        """Overwrite the editable fields."""
        self.first_name = fields.first_name
        self.last_name = fields.last_name
        self.national_elector_number = fields.national_elector_number
        self.phone = fields.phone
        self.email = fields.email
        self.voting_bureau = fields.voting_bureau
        self.support_committee_consent = fields.support_committee_consent
        self.newsletter_consent = fields.newsletter_consent

    def to_contact(self) -> ProxyContact:
        return ProxyContact(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            national_elector_number=self.national_elector_number,
            phone=self.phone,
            email=self.email,
        )

    @classmethod
    def from_fields(
        cls, type: ParticipantType | str, fields: ParticipantFields
    ) -> "ProxyParticipant":
        """Build a new pending, enabled participant from form fields."""
        return cls(
            type=type,
            first_name=fields.first_name,
            last_name=fields.last_name,
            national_elector_number=fields.national_elector_number,
            phone=fields.phone,
            email=fields.email,
            voting_bureau=fields.voting_bureau,
            support_committee_consent=fields.support_committee_consent,
            newsletter_consent=fields.newsletter_consent,
        )
