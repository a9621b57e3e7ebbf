"""Outcome of a match confirmation."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class ConfirmOutcome:
    """Which steps of a confirmation were applied.

    Confirmation is not atomic: emails go out first, then the match and both
    participants are updated. partially_applied is True when the emails left
    (or had left on an earlier attempt) but not every status write landed.
    """

    match_id: UUID
    notification_sent: bool
    notification_skipped: bool = False
    match_confirmed: bool = False
    participants_matched: bool = False

    @property
    def partially_applied(self) -> bool:
        delivered = self.notification_sent or self.notification_skipped
        return delivered and not (self.match_confirmed and self.participants_matched)
