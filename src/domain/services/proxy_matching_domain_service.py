"""Procuration matching domain service.

Pure rules over participant and match lists that were already fetched from
the store. Nothing here performs I/O; the use case reads current state,
hands it to this service, then writes.
"""

from __future__ import annotations

import re

from collections.abc import Iterable
from uuid import UUID

from src.domain.entities.proxy_match import ProxyMatch
from src.domain.entities.proxy_participant import ProxyParticipant
from src.domain.exceptions import ConflictError, ValidationError
from src.domain.value_objects.proxy_status import (
    ParticipantStatus,
    ParticipantType,
    StatusFilter,
)


_PHONE_QUERY = re.compile(r"^[0-9\s+.()-]+$")


class ProxyMatchingDomainService:
    """Availability, filtering and pairing rules for the matching workflow."""

    def active_participant_ids(self, matches: Iterable[ProxyMatch]) -> set[UUID]:
        """IDs of every participant held by a pending or confirmed match."""
        ids: set[UUID] = set()
        for match in matches:
            if match.is_active:
                ids.update(match.participant_ids)
        return ids

    def find_active_match(
        self, matches: Iterable[ProxyMatch], participant_id: UUID
    ) -> ProxyMatch | None:
        """Return the active match referencing a participant, if any."""
        for match in matches:
            if match.is_active and match.involves(participant_id):
                return match
        return None

    def available_participants(
        self,
        participants: Iterable[ProxyParticipant],
        matches: Iterable[ProxyMatch],
        exclude_disabled: bool = True,
    ) -> list[ProxyParticipant]:
        """Participants that can be proposed in a new match.

        Args:
            participants: Candidates, in store order
            matches: Every known match
            exclude_disabled: Drop disabled participants (audit views pass False)

        Returns:
            Participants not held by an active match, order preserved
        """
        held = self.active_participant_ids(matches)
        return [
            p
            for p in participants
            if p.id not in held and not (exclude_disabled and p.disabled)
        ]

    def filter_participants(
        self,
        participants: Iterable[ProxyParticipant],
        status_filter: StatusFilter | str = StatusFilter.PENDING,
        include_disabled: bool = False,
    ) -> list[ProxyParticipant]:
        """Select participants by status and disabled flag.

        Args:
            participants: Participants to filter
            status_filter: pending, matched or all
            include_disabled: Keep disabled participants

        Returns:
            Matching participants, order preserved
        """
        status_filter = StatusFilter(status_filter)
        result = []
        for participant in participants:
            if participant.disabled and not include_disabled:
                continue
            if status_filter is StatusFilter.PENDING:
                if participant.status is not ParticipantStatus.PENDING:
                    continue
            elif status_filter is StatusFilter.MATCHED:
                if participant.status is not ParticipantStatus.MATCHED:
                    continue
            result.append(participant)
        return result

    def search_participants(
        self, participants: Iterable[ProxyParticipant], query: str | None
    ) -> list[ProxyParticipant]:
        """Case-insensitive search over name, elector number, email and phone.

        Phones are compared digit by digit, and only for queries made of
        digits and phone separators.
        """
        participants = list(participants)
        if not query or not query.strip():
            return participants

        needle = query.strip().casefold()
        digits = ""
        if _PHONE_QUERY.match(needle):
            digits = "".join(ch for ch in needle if ch.isdigit())

        def _matches(p: ProxyParticipant) -> bool:
            haystacks = (
                p.full_name,
                f"{p.last_name} {p.first_name}",
                p.email,
                p.national_elector_number,
            )
            if any(needle in h.casefold() for h in haystacks):
                return True
            phone_digits = "".join(ch for ch in p.phone if ch.isdigit())
            return len(digits) >= 2 and digits in phone_digits

        return [p for p in participants if _matches(p)]

    def validate_pairing(
        self,
        requester: ProxyParticipant,
        volunteer: ProxyParticipant,
        matches: Iterable[ProxyMatch],
    ) -> None:
        """Check that two participants may be matched together.

        Raises:
            ValidationError: Wrong types or a disabled participant
            ConflictError: Either participant is already held by an active match
        """
        if requester.type is not ParticipantType.REQUESTER:
            raise ValidationError(
                f"{requester.full_name} n'est pas un mandant",
                {"participant_id": str(requester.id), "type": requester.type.value},
            )
        if volunteer.type is not ParticipantType.VOLUNTEER:
            raise ValidationError(
                f"{volunteer.full_name} n'est pas un mandataire",
                {"participant_id": str(volunteer.id), "type": volunteer.type.value},
            )
        for participant in (requester, volunteer):
            if participant.disabled:
                raise ValidationError(
                    f"{participant.full_name} est désactivé(e)",
                    {"participant_id": str(participant.id)},
                )

        matches = list(matches)
        for participant in (requester, volunteer):
            existing = self.find_active_match(matches, participant.id)  # type: ignore[arg-type]
            if existing is not None:
                raise ConflictError(
                    f"{participant.full_name} fait déjà partie d'un binôme",
                    {
                        "participant_id": str(participant.id),
                        "match_id": str(existing.id),
                    },
                )
