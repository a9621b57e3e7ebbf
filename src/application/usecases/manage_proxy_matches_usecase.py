"""Use case for managing procuration matches."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from src.application.dtos.proxy_matching_dto import (
    ConfirmMatchInputDto,
    ConfirmMatchOutputDto,
    DisableParticipantOutputDto,
    DissolveMatchOutputDto,
    ListMatchesOutputDto,
    ListParticipantsInputDto,
    ListParticipantsOutputDto,
    MatchOutputItem,
    ParticipantOutputItem,
    ParticipantSnapshot,
    ProposeMatchInputDto,
    ProposeMatchOutputDto,
    ProxyStatisticsOutputDto,
    UpdateParticipantInputDto,
)
from src.common.logging import get_logger
from src.domain.entities import ProxyMatch, ProxyParticipant
from src.domain.exceptions import (
    ConflictError,
    NotFoundError,
    NotificationError,
    PartialConfirmationError,
    StoreError,
    ValidationError,
)
from src.domain.repositories.proxy_match_repository import ProxyMatchRepository
from src.domain.repositories.proxy_participant_repository import (
    ProxyParticipantRepository,
)
from src.domain.services.interfaces.proxy_notification_service import (
    IProxyNotificationService,
)
from src.domain.services.proxy_matching_domain_service import (
    ProxyMatchingDomainService,
)
from src.domain.services.proxy_participant_validator import (
    ProxyParticipantValidator,
)
from src.domain.value_objects.confirm_outcome import ConfirmOutcome
from src.domain.value_objects.proxy_status import (
    MatchStatus,
    NotificationDelivery,
    ParticipantStatus,
    ParticipantType,
)


logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ManageProxyMatchesUseCase:
    """Procuration matching engine.

    Pairs requesters (mandants) with volunteers (mandataires) and drives the
    match lifecycle:

        (none) --propose--> pending --confirm--> confirmed
        pending|confirmed --dissolve--> (deleted)

    Participants move to "matched" only when their match is confirmed and
    back to "pending" when it is dissolved. A participant is held by at most
    one pending or confirmed match.

    The use case keeps no state between calls: every operation reads the
    current rows, validates, then writes. Reads and writes are separate round
    trips, so two operators racing on the same participant can both pass the
    "already matched" check; the partial unique index on proxy_matches turns
    the loser's insert into a ConflictError.

    Attributes:
        participant_repo: Requester and volunteer repository
        match_repo: Match repository
        notification_service: Sends contact emails on confirmation
        domain_service: Availability and pairing rules
        validator: Participant field validation
        notification_delivery: Whether confirmation may re-send emails

    Example:
        >>> use_case = ManageProxyMatchesUseCase(...)
        >>> proposed = await use_case.propose(
        ...     ProposeMatchInputDto(requester_id=alice_id, volunteer_id=bob_id)
        ... )
        >>> await use_case.confirm(
        ...     ConfirmMatchInputDto(match_id=proposed.match.id, actor_id=admin_id)
        ... )
    """

    def __init__(
        self,
        participant_repository: ProxyParticipantRepository,
        match_repository: ProxyMatchRepository,
        notification_service: IProxyNotificationService,
        domain_service: ProxyMatchingDomainService | None = None,
        validator: ProxyParticipantValidator | None = None,
        notification_delivery: NotificationDelivery = (
            NotificationDelivery.AT_LEAST_ONCE
        ),
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the use case.

        Args:
            participant_repository: Participant repository implementation
            match_repository: Match repository implementation
            notification_service: Match notification dispatcher
            domain_service: Matching rules (a default instance if omitted)
            validator: Field validator (a default instance if omitted)
            notification_delivery: Delivery guarantee for confirmation emails
            clock: Returns the current time, used for confirmed_at
        """
        self.participant_repo = participant_repository
        self.match_repo = match_repository
        self.notification_service = notification_service
        self.domain_service = domain_service or ProxyMatchingDomainService()
        self.validator = validator or ProxyParticipantValidator()
        self.notification_delivery = NotificationDelivery(notification_delivery)
        self.clock = clock

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_available(
        self, type: ParticipantType, exclude_disabled: bool = True
    ) -> list[ParticipantOutputItem]:
        """List participants of a type that can be proposed in a new match.

        Args:
            type: requester or volunteer
            exclude_disabled: Drop disabled participants

        Returns:
            Participants not held by a pending or confirmed match, newest first
        """
        participants = await self.participant_repo.get_by_type(ParticipantType(type))
        matches = await self.match_repo.get_all()
        available = self.domain_service.available_participants(
            participants, matches, exclude_disabled=exclude_disabled
        )
        return [ParticipantOutputItem.from_entity(p) for p in available]

    async def list_participants(
        self, input_dto: ListParticipantsInputDto
    ) -> ListParticipantsOutputDto:
        """List requesters or volunteers for the triage views."""
        participants = await self.participant_repo.get_by_type(
            ParticipantType(input_dto.type)
        )
        filtered = self.domain_service.filter_participants(
            participants,
            input_dto.status_filter,
            include_disabled=input_dto.include_disabled,
        )
        filtered = self.domain_service.search_participants(filtered, input_dto.search)
        return ListParticipantsOutputDto(
            participants=[ParticipantOutputItem.from_entity(p) for p in filtered],
            total=len(participants),
        )

    async def get_participant(self, participant_id: UUID) -> ParticipantOutputItem:
        """Get one participant.

        Raises:
            NotFoundError: The participant does not exist
        """
        return ParticipantOutputItem.from_entity(
            await self._get_participant(participant_id)
        )

    async def list_matches(self) -> ListMatchesOutputDto:
        """List every match with both participants embedded.

        A participant that cannot be resolved is shown as a placeholder rather
        than failing the whole listing.
        """
        matches = await self.match_repo.get_all()
        participants = await self.participant_repo.get_all()
        by_id = {p.id: p for p in participants}

        items = []
        for match in matches:
            items.append(
                MatchOutputItem.from_entity(
                    match,
                    requester=self._snapshot(by_id, match.requester_id, match),
                    volunteer=self._snapshot(by_id, match.volunteer_id, match),
                )
            )
        return ListMatchesOutputDto(matches=items)

    async def get_statistics(self) -> ProxyStatisticsOutputDto:
        """Counters for the administration dashboard."""
        requesters = await self.participant_repo.get_by_type(ParticipantType.REQUESTER)
        volunteers = await self.participant_repo.get_by_type(ParticipantType.VOLUNTEER)
        matches = await self.match_repo.get_all()

        available_requesters = self.domain_service.available_participants(
            requesters, matches
        )
        available_volunteers = self.domain_service.available_participants(
            volunteers, matches
        )

        def _count(group: list[ProxyParticipant], status: ParticipantStatus) -> int:
            return sum(1 for p in group if not p.disabled and p.status is status)

        return ProxyStatisticsOutputDto(
            requesters_total=len(requesters),
            requesters_pending=_count(requesters, ParticipantStatus.PENDING),
            requesters_matched=_count(requesters, ParticipantStatus.MATCHED),
            requesters_disabled=sum(1 for p in requesters if p.disabled),
            requesters_available=len(available_requesters),
            volunteers_total=len(volunteers),
            volunteers_pending=_count(volunteers, ParticipantStatus.PENDING),
            volunteers_matched=_count(volunteers, ParticipantStatus.MATCHED),
            volunteers_disabled=sum(1 for p in volunteers if p.disabled),
            volunteers_available=len(available_volunteers),
            matches_pending=sum(
                1 for m in matches if m.status is MatchStatus.PENDING
            ),
            matches_confirmed=sum(
                1 for m in matches if m.status is MatchStatus.CONFIRMED
            ),
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def propose(self, input_dto: ProposeMatchInputDto) -> ProposeMatchOutputDto:
        """Pair a requester with a volunteer in a pending match.

        Participant statuses are left untouched; they only change on confirm.

        Raises:
            ValidationError: Missing or unknown ids, wrong types, disabled
            ConflictError: Either participant is already in an active match
        """
        if input_dto.requester_id is None or input_dto.volunteer_id is None:
            raise ValidationError("Veuillez sélectionner un mandant et un mandataire.")

        requester = await self.participant_repo.get_by_id(input_dto.requester_id)
        if requester is None:
            raise ValidationError(
                "Mandant introuvable",
                {"requester_id": str(input_dto.requester_id)},
            )
        volunteer = await self.participant_repo.get_by_id(input_dto.volunteer_id)
        if volunteer is None:
            raise ValidationError(
                "Mandataire introuvable",
                {"volunteer_id": str(input_dto.volunteer_id)},
            )

        active_matches = []
        for participant_id in (input_dto.requester_id, input_dto.volunteer_id):
            active = await self.match_repo.get_active_by_participant_id(participant_id)
            if active is not None:
                active_matches.append(active)

        self.domain_service.validate_pairing(requester, volunteer, active_matches)

        created = await self.match_repo.create(
            ProxyMatch(
                requester_id=input_dto.requester_id,
                volunteer_id=input_dto.volunteer_id,
                status=MatchStatus.PENDING,
            )
        )
        logger.info(
            "Proxy match proposed",
            match_id=str(created.id),
            requester_id=str(requester.id),
            volunteer_id=str(volunteer.id),
        )
        return ProposeMatchOutputDto(
            match=MatchOutputItem.from_entity(
                created,
                requester=ParticipantSnapshot.from_entity(requester),
                volunteer=ParticipantSnapshot.from_entity(volunteer),
            )
        )

    async def confirm(self, input_dto: ConfirmMatchInputDto) -> ConfirmMatchOutputDto:
        """Send both participants each other's details, then confirm the match.

        Order is fixed: (1) dispatch the emails, (2) mark the match confirmed,
        (3) mark both participants matched. A failed dispatch writes nothing.
        A failed write after a successful dispatch raises
        PartialConfirmationError whose outcome says what was applied.

        Raises:
            NotFoundError: Unknown match or unresolvable participant
            ConflictError: The match is already confirmed
            NotificationError: The dispatch failed; the match stays pending
            PartialConfirmationError: Emails sent but status writes incomplete
        """
        match = await self._get_match(input_dto.match_id)
        if match.is_confirmed:
            raise ConflictError(
                "Ce binôme est déjà confirmé", {"match_id": str(match.id)}
            )

        requester = await self.participant_repo.get_by_id(match.requester_id)
        volunteer = await self.participant_repo.get_by_id(match.volunteer_id)
        if requester is None or volunteer is None:
            raise NotFoundError(
                "Données du binôme manquantes",
                {
                    "match_id": str(match.id),
                    "requester_found": requester is not None,
                    "volunteer_found": volunteer is not None,
                },
            )
        assert match.id is not None

        skip_dispatch = (
            self.notification_delivery is NotificationDelivery.AT_MOST_ONCE
            and match.notified_at is not None
        )
        if skip_dispatch:
            logger.info(
                "Skipping dispatch, match already notified",
                match_id=str(match.id),
                notified_at=match.notified_at.isoformat() if match.notified_at else None,
            )
        else:
            await self._dispatch(match.id, requester, volunteer)
            if self.notification_delivery is NotificationDelivery.AT_MOST_ONCE:
                notified_at = self.clock()
                try:
                    await self.match_repo.mark_notified(match.id, notified_at)
                    match.notified_at = notified_at
                except StoreError as e:
                    raise self._partial(
                        ConfirmOutcome(match_id=match.id, notification_sent=True), e
                    ) from e

        sent = not skip_dispatch
        match.confirm(input_dto.actor_id, self.clock())
        try:
            confirmed = await self.match_repo.update(match)
        except StoreError as e:
            raise self._partial(
                ConfirmOutcome(
                    match_id=match.id,
                    notification_sent=sent,
                    notification_skipped=skip_dispatch,
                ),
                e,
            ) from e

        try:
            await self.participant_repo.update_status(
                [match.requester_id, match.volunteer_id], ParticipantStatus.MATCHED
            )
        except StoreError as e:
            raise self._partial(
                ConfirmOutcome(
                    match_id=match.id,
                    notification_sent=sent,
                    notification_skipped=skip_dispatch,
                    match_confirmed=True,
                ),
                e,
            ) from e

        requester.status = ParticipantStatus.MATCHED
        volunteer.status = ParticipantStatus.MATCHED
        logger.info(
            "Proxy match confirmed",
            match_id=str(match.id),
            confirmed_by=input_dto.actor_id,
            notification_sent=sent,
        )
        return ConfirmMatchOutputDto(
            match=MatchOutputItem.from_entity(
                confirmed,
                requester=ParticipantSnapshot.from_entity(requester),
                volunteer=ParticipantSnapshot.from_entity(volunteer),
            ),
            outcome=ConfirmOutcome(
                match_id=match.id,
                notification_sent=sent,
                notification_skipped=skip_dispatch,
                match_confirmed=True,
                participants_matched=True,
            ),
        )

    async def dissolve(self, match_id: UUID) -> DissolveMatchOutputDto:
        """Delete a match and put both participants back to pending.

        Raises:
            NotFoundError: The match does not exist
        """
        match = await self._get_match(match_id)
        deleted = await self.match_repo.delete(match_id)
        if not deleted:
            raise NotFoundError("Binôme introuvable", {"match_id": str(match_id)})

        reset_ids = [match.requester_id, match.volunteer_id]
        await self.participant_repo.update_status(reset_ids, ParticipantStatus.PENDING)
        logger.info(
            "Proxy match dissolved",
            match_id=str(match_id),
            previous_status=match.status.value,
        )
        return DissolveMatchOutputDto(match_id=match_id, reset_participant_ids=reset_ids)

    async def disable(self, participant_id: UUID) -> DisableParticipantOutputDto:
        """Exclude a participant from matching.

        An active match holding the participant is dissolved first and the
        other participant goes back to pending, so nobody stays matched with
        a disabled person.

        Raises:
            NotFoundError: The participant does not exist
        """
        participant = await self._get_participant(participant_id)
        output = DisableParticipantOutputDto(participant_id=participant_id)

        active = await self.match_repo.get_active_by_participant_id(participant_id)
        if active is not None:
            assert active.id is not None
            other_id = active.other_participant_id(participant_id)
            await self.match_repo.delete(active.id)
            await self.participant_repo.update_status(
                [other_id], ParticipantStatus.PENDING
            )
            output.dissolved_match_id = active.id
            output.released_participant_id = other_id
            logger.info(
                "Dissolved match of disabled participant",
                match_id=str(active.id),
                participant_id=str(participant_id),
                released_participant_id=str(other_id),
            )

        if not await self.participant_repo.set_disabled(participant_id, True):
            raise NotFoundError(
                "Personne introuvable", {"participant_id": str(participant_id)}
            )
        logger.info(
            "Proxy participant disabled",
            participant_id=str(participant_id),
            type=participant.type.value,
        )
        return output

    async def enable(self, participant_id: UUID) -> None:
        """Make a disabled participant eligible again.

        No previous match is restored and the status is left as it is.

        Raises:
            NotFoundError: The participant does not exist
        """
        await self._get_participant(participant_id)
        if not await self.participant_repo.set_disabled(participant_id, False):
            raise NotFoundError(
                "Personne introuvable", {"participant_id": str(participant_id)}
            )
        logger.info("Proxy participant enabled", participant_id=str(participant_id))

    async def update_participant(
        self, input_dto: UpdateParticipantInputDto
    ) -> ParticipantOutputItem:
        """Edit a participant's contact and consent fields.

        Match state is unaffected.

        Raises:
            ValidationError: Invalid field values
            NotFoundError: The participant does not exist
        """
        fields = self.validator.validate(input_dto.fields)
        participant = await self._get_participant(input_dto.participant_id)
        participant.apply_fields(fields)
        updated = await self.participant_repo.update(participant)
        logger.info(
            "Proxy participant updated", participant_id=str(input_dto.participant_id)
        )
        return ParticipantOutputItem.from_entity(updated)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_match(self, match_id: UUID) -> ProxyMatch:
        if match_id is None:
            raise ValidationError("Identifiant de binôme manquant")
        match = await self.match_repo.get_by_id(match_id)
        if match is None:
            raise NotFoundError("Binôme introuvable", {"match_id": str(match_id)})
        return match

    async def _get_participant(self, participant_id: UUID) -> ProxyParticipant:
        if participant_id is None:
            raise ValidationError("Identifiant de personne manquant")
        participant = await self.participant_repo.get_by_id(participant_id)
        if participant is None:
            raise NotFoundError(
                "Personne introuvable", {"participant_id": str(participant_id)}
            )
        return participant

    async def _dispatch(
        self,
        match_id: UUID,
        requester: ProxyParticipant,
        volunteer: ProxyParticipant,
    ) -> None:
        try:
            await self.notification_service.notify_match(
                match_id, requester.to_contact(), volunteer.to_contact()
            )
        except NotificationError as e:
            logger.error(
                "Proxy match notification failed",
                match_id=str(match_id),
                error=str(e),
            )
            raise
        except Exception as e:
            logger.exception(
                "Unexpected error while notifying proxy match",
                match_id=str(match_id),
            )
            raise NotificationError(
                "Erreur lors de l'envoi des emails",
                {"match_id": str(match_id), "error": str(e)},
            ) from e

    def _partial(
        self, outcome: ConfirmOutcome, cause: StoreError
    ) -> PartialConfirmationError:
        logger.error(
            "Proxy match confirmation partially applied",
            match_id=str(outcome.match_id),
            notification_sent=outcome.notification_sent,
            match_confirmed=outcome.match_confirmed,
            error=str(cause),
        )
        return PartialConfirmationError(
            "Les emails ont été envoyés mais la mise à jour des statuts a échoué. "
            "Vérifiez le binôme manuellement.",
            outcome,
            {"match_id": str(outcome.match_id), "error": str(cause)},
        )

    def _snapshot(
        self,
        by_id: dict[UUID | None, ProxyParticipant],
        participant_id: UUID,
        match: ProxyMatch,
    ) -> ParticipantSnapshot:
        participant = by_id.get(participant_id)
        if participant is None:
            logger.warning(
                "Match references an unknown participant",
                match_id=str(match.id),
                participant_id=str(participant_id),
            )
            return ParticipantSnapshot.placeholder(participant_id)
        return ParticipantSnapshot.from_entity(participant)
