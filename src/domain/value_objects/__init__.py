"""Domain value objects."""

from src.domain.value_objects.confirm_outcome import ConfirmOutcome
from src.domain.value_objects.participant_fields import ParticipantFields
from src.domain.value_objects.proxy_contact import ProxyContact
from src.domain.value_objects.proxy_status import (
    MatchStatus,
    NotificationDelivery,
    ParticipantStatus,
    ParticipantType,
    StatusFilter,
)


__all__ = [
    "ConfirmOutcome",
    "MatchStatus",
    "NotificationDelivery",
    "ParticipantFields",
    "ParticipantStatus",
    "ParticipantType",
    "ProxyContact",
    "StatusFilter",
]
