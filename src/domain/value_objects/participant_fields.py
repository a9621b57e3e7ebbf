"""Editable participant fields."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParticipantFields:
    """Fields an administrator (or the public form) may set on a participant.

    Type, status and the disabled flag are not part of it: they are
    changed only through the matching workflow.
    """

    first_name: str
    last_name: str
    national_elector_number: str
    phone: str
    email: str
    voting_bureau: int | None = None
    support_committee_consent: bool = True
    newsletter_consent: bool = True

    def normalized(self) -> "ParticipantFields":
        """Return a copy with surrounding whitespace stripped."""
        return ParticipantFields(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            national_elector_number=self.national_elector_number.strip(),
            phone=self.phone.strip(),
            email=self.email.strip(),
            voting_bureau=self.voting_bureau,
            support_committee_consent=self.support_committee_consent,
            newsletter_consent=self.newsletter_consent,
        )
