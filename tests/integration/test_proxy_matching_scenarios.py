"""End-to-end matching workflows against in-memory stores."""

from datetime import UTC, datetime

import pytest

from src.application.dtos.proxy_matching_dto import (
    ConfirmMatchInputDto,
    ListParticipantsInputDto,
    ProposeMatchInputDto,
    RegisterParticipantInputDto,
)
from src.application.usecases.manage_proxy_matches_usecase import (
    ManageProxyMatchesUseCase,
)
from src.application.usecases.register_proxy_participant_usecase import (
    RegisterProxyParticipantUseCase,
)
from src.domain.exceptions import (
    ConflictError,
    NotificationError,
    PartialConfirmationError,
)
from src.domain.value_objects.proxy_status import (
    MatchStatus,
    NotificationDelivery,
    ParticipantStatus,
    ParticipantType,
    StatusFilter,
)
from tests.fixtures.in_memory_repositories import (
    InMemoryMatchRepository,
    InMemoryParticipantRepository,
    RecordingNotifier,
)
from tests.fixtures.proxy_factories import make_fields, make_requester, make_volunteer


pytestmark = pytest.mark.integration

NOW = datetime(2026, 3, 1, 18, 30, tzinfo=UTC)


@pytest.fixture
def alice():
    return make_requester()


@pytest.fixture
def bob():
    return make_volunteer()


@pytest.fixture
def carol():
    return make_volunteer(
        first_name="Carol", last_name="Petit", national_elector_number="555555555"
    )


@pytest.fixture
def participants(alice, bob, carol):
    return InMemoryParticipantRepository([alice, bob, carol])


@pytest.fixture
def matches():
    return InMemoryMatchRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


def _engine(participants, matches, notifier, delivery=NotificationDelivery.AT_LEAST_ONCE):
    return ManageProxyMatchesUseCase(
        participant_repository=participants,
        match_repository=matches,
        notification_service=notifier,
        notification_delivery=delivery,
        clock=lambda: NOW,
    )


@pytest.fixture
def engine(participants, matches, notifier):
    return _engine(participants, matches, notifier)


@pytest.mark.asyncio
async def test_full_lifecycle(engine, participants, notifier, alice, bob):
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    match_id = proposed.match.id

    available = await engine.list_available(ParticipantType.VOLUNTEER)
    assert bob.id not in [p.id for p in available]
    assert participants.rows[alice.id].status is ParticipantStatus.PENDING

    confirmed = await engine.confirm(
        ConfirmMatchInputDto(match_id=match_id, actor_id="admin-1")
    )
    assert confirmed.match.status == "confirmed"
    assert confirmed.match.confirmed_at == NOW
    assert [sent[0] for sent in notifier.sent] == [match_id]
    assert participants.rows[alice.id].status is ParticipantStatus.MATCHED
    assert participants.rows[bob.id].status is ParticipantStatus.MATCHED

    stats = await engine.get_statistics()
    assert stats.matches_confirmed == 1
    assert stats.requesters_matched == 1

    await engine.dissolve(match_id)
    assert participants.rows[alice.id].status is ParticipantStatus.PENDING
    assert participants.rows[bob.id].status is ParticipantStatus.PENDING
    assert (await engine.list_matches()).matches == []
    pending = await engine.list_participants(
        ListParticipantsInputDto(type=ParticipantType.REQUESTER)
    )
    assert [p.id for p in pending.participants] == [alice.id]


@pytest.mark.asyncio
async def test_participant_cannot_join_two_active_matches(engine, alice, bob, carol):
    await engine.propose(ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id))

    with pytest.raises(ConflictError):
        await engine.propose(
            ProposeMatchInputDto(requester_id=alice.id, volunteer_id=carol.id)
        )


@pytest.mark.asyncio
async def test_second_confirmation_is_rejected(engine, notifier, alice, bob):
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    with pytest.raises(ConflictError):
        await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_failed_dispatch_keeps_match_pending_until_retry(
    engine, participants, matches, notifier, alice, bob
):
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    notifier.fail = True

    with pytest.raises(NotificationError):
        await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    assert matches.rows[proposed.match.id].status is MatchStatus.PENDING
    assert participants.rows[alice.id].status is ParticipantStatus.PENDING

    notifier.fail = False
    result = await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    assert result.outcome.notification_sent
    assert matches.rows[proposed.match.id].status is MatchStatus.CONFIRMED


@pytest.mark.asyncio
async def test_partial_confirmation_then_reconciled_retry_at_most_once(
    participants, matches, notifier, alice, bob
):
    engine = _engine(
        participants, matches, notifier, delivery=NotificationDelivery.AT_MOST_ONCE
    )
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    matches.fail_update = True

    with pytest.raises(PartialConfirmationError) as exc_info:
        await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    outcome = exc_info.value.outcome
    assert outcome.notification_sent
    assert not outcome.match_confirmed
    assert matches.rows[proposed.match.id].notified_at == NOW

    matches.fail_update = False
    retried = await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    assert retried.outcome.notification_skipped
    assert not retried.outcome.notification_sent
    assert len(notifier.sent) == 1
    assert participants.rows[bob.id].status is ParticipantStatus.MATCHED


@pytest.mark.asyncio
async def test_partial_confirmation_when_participant_write_fails(
    engine, participants, matches, notifier, alice, bob
):
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    participants.fail_update_status = True

    with pytest.raises(PartialConfirmationError) as exc_info:
        await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    outcome = exc_info.value.outcome
    assert outcome.match_confirmed
    assert not outcome.participants_matched
    assert outcome.partially_applied
    assert matches.rows[proposed.match.id].status is MatchStatus.CONFIRMED
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_disabling_a_matched_participant_frees_the_other(
    engine, participants, matches, alice, bob
):
    proposed = await engine.propose(
        ProposeMatchInputDto(requester_id=alice.id, volunteer_id=bob.id)
    )
    await engine.confirm(ConfirmMatchInputDto(match_id=proposed.match.id))

    result = await engine.disable(bob.id)

    assert result.dissolved_match_id == proposed.match.id
    assert result.released_participant_id == alice.id
    assert matches.rows == {}
    assert participants.rows[alice.id].status is ParticipantStatus.PENDING
    assert participants.rows[bob.id].disabled

    available = await engine.list_available(ParticipantType.VOLUNTEER)
    assert bob.id not in [p.id for p in available]

    await engine.enable(bob.id)
    listed = await engine.list_participants(
        ListParticipantsInputDto(
            type=ParticipantType.VOLUNTEER, status_filter=StatusFilter.ALL
        )
    )
    assert bob.id in [p.id for p in listed.participants]


@pytest.mark.asyncio
async def test_registration_then_duplicate_is_rejected(participants):
    use_case = RegisterProxyParticipantUseCase(participant_repository=participants)
    fields = make_fields(national_elector_number="111222333")

    created = await use_case.execute(
        RegisterParticipantInputDto(type=ParticipantType.REQUESTER, fields=fields)
    )

    assert created.participant.status == "pending"
    assert created.team_notified is False
    with pytest.raises(ConflictError):
        await use_case.execute(
            RegisterParticipantInputDto(type=ParticipantType.REQUESTER, fields=fields)
        )

    other_side = await use_case.execute(
        RegisterParticipantInputDto(type=ParticipantType.VOLUNTEER, fields=fields)
    )
    assert other_side.participant.type == "volunteer"
