"""Enumerations used by the procuration matching workflow."""

from enum import Enum


class ParticipantType(str, Enum):
    """Role a participant registered for."""

    REQUESTER = "requester"  # mandant
    VOLUNTEER = "volunteer"  # mandataire


class ParticipantStatus(str, Enum):
    """Participant status, moved only by match lifecycle events."""

    PENDING = "pending"
    MATCHED = "matched"


class MatchStatus(str, Enum):
    """Match status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"

    @classmethod
    def active(cls) -> tuple["MatchStatus", ...]:
        """Statuses for which a match holds both its participants."""
        return (cls.PENDING, cls.CONFIRMED)


class StatusFilter(str, Enum):
    """Status selector used by participant list views."""

    PENDING = "pending"
    MATCHED = "matched"
    ALL = "all"


class NotificationDelivery(str, Enum):
    """Delivery guarantee for match confirmation emails.

    AT_LEAST_ONCE re-sends the emails every time a pending match is confirmed.
    AT_MOST_ONCE records the first successful dispatch on the match and never
    sends again for it.
    """

    AT_LEAST_ONCE = "at_least_once"
    AT_MOST_ONCE = "at_most_once"
