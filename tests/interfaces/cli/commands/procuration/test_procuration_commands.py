"""Tests for the procuration CLI commands."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from click.testing import CliRunner

from src.application.dtos.proxy_matching_dto import (
    ConfirmMatchOutputDto,
    DisableParticipantOutputDto,
    ListMatchesOutputDto,
    ListParticipantsOutputDto,
    MatchOutputItem,
    ParticipantOutputItem,
    ParticipantSnapshot,
    ProposeMatchOutputDto,
    ProxyStatisticsOutputDto,
    RegisterParticipantOutputDto,
)
from src.domain.exceptions import (
    ConflictError,
    NotificationError,
    PartialConfirmationError,
)
from src.domain.value_objects.confirm_outcome import ConfirmOutcome
from src.domain.value_objects.proxy_status import (
    MatchStatus,
    ParticipantType,
    StatusFilter,
)
from src.interfaces.cli.main import cli
from tests.fixtures.proxy_factories import make_match, make_requester, make_volunteer


FACTORY = "src.interfaces.factories.proxy_matching_factory"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def use_case():
    return AsyncMock()


@pytest.fixture(autouse=True)
def patched_factory(use_case):
    @asynccontextmanager
    async def factory(settings=None):
        yield use_case

    with (
        patch(f"{FACTORY}.manage_proxy_matches_usecase", factory),
        patch(f"{FACTORY}.register_proxy_participant_usecase", factory),
        patch("src.interfaces.cli.main.setup_logging"),
    ):
        yield


def _match_item(status="pending", volunteer_found=True) -> MatchOutputItem:
    requester, volunteer = make_requester(), make_volunteer()
    match = make_match(requester, volunteer, status=MatchStatus(status))
    return MatchOutputItem.from_entity(
        match,
        requester=ParticipantSnapshot.from_entity(requester),
        volunteer=(
            ParticipantSnapshot.from_entity(volunteer)
            if volunteer_found
            else ParticipantSnapshot.placeholder(volunteer.id)  # type: ignore[arg-type]
        ),
    )


class TestParticipantCommands:
    def test_requesters_lists_with_filters(self, runner, use_case):
        requester = make_requester(first_name="Alice", last_name="Martin")
        use_case.list_participants.return_value = ListParticipantsOutputDto(
            participants=[ParticipantOutputItem.from_entity(requester)], total=4
        )

        result = runner.invoke(
            cli, ["requesters", "--status", "all", "--search", "martin"]
        )

        assert result.exit_code == 0, result.output
        assert "Mandants (1 / 4)" in result.output
        assert "Alice Martin" in result.output
        dto = use_case.list_participants.await_args.args[0]
        assert dto.type is ParticipantType.REQUESTER
        assert dto.status_filter is StatusFilter.ALL
        assert dto.search == "martin"
        assert dto.include_disabled is False

    def test_volunteers_empty(self, runner, use_case):
        use_case.list_participants.return_value = ListParticipantsOutputDto(
            participants=[], total=0
        )

        result = runner.invoke(cli, ["volunteers", "--include-disabled"])

        assert result.exit_code == 0, result.output
        assert "Aucun mandataire" in result.output
        assert use_case.list_participants.await_args.args[0].include_disabled

    def test_available(self, runner, use_case):
        use_case.list_available.return_value = [
            ParticipantOutputItem.from_entity(make_volunteer(first_name="Bob"))
        ]

        result = runner.invoke(cli, ["available", "volunteer"])

        assert result.exit_code == 0, result.output
        assert "Mandataires disponibles (1)" in result.output
        use_case.list_available.assert_awaited_once_with(
            ParticipantType.VOLUNTEER, exclude_disabled=True
        )

    def test_available_rejects_unknown_type(self, runner, use_case):
        result = runner.invoke(cli, ["available", "observer"])

        assert result.exit_code == 2
        use_case.list_available.assert_not_awaited()

    def test_disable_reports_dissolved_match(self, runner, use_case):
        participant_id, match_id, other_id = uuid4(), uuid4(), uuid4()
        use_case.disable.return_value = DisableParticipantOutputDto(
            participant_id=participant_id,
            dissolved_match_id=match_id,
            released_participant_id=other_id,
        )

        result = runner.invoke(cli, ["disable", str(participant_id)])

        assert result.exit_code == 0, result.output
        assert str(match_id) in result.output
        assert "Personne désactivée" in result.output
        use_case.disable.assert_awaited_once_with(participant_id)

    def test_enable(self, runner, use_case):
        participant_id = uuid4()

        result = runner.invoke(cli, ["enable", str(participant_id)])

        assert result.exit_code == 0, result.output
        use_case.enable.assert_awaited_once_with(participant_id)

    def test_edit_keeps_unspecified_fields(self, runner, use_case):
        participant = make_volunteer(phone="0611111111", voting_bureau=2)
        current = ParticipantOutputItem.from_entity(participant)
        use_case.get_participant.return_value = current
        use_case.update_participant.return_value = current

        result = runner.invoke(
            cli,
            ["edit", str(participant.id), "--phone", "0622222222", "--voting-bureau", "0"],
        )

        assert result.exit_code == 0, result.output
        dto = use_case.update_participant.await_args.args[0]
        assert dto.participant_id == participant.id
        assert dto.fields.phone == "0622222222"
        assert dto.fields.voting_bureau is None
        assert dto.fields.first_name == participant.first_name
        assert dto.fields.email == participant.email

    def test_register(self, runner, use_case):
        created = make_requester()
        use_case.execute.return_value = RegisterParticipantOutputDto(
            participant=ParticipantOutputItem.from_entity(created),
            team_notified=False,
        )

        result = runner.invoke(
            cli,
            [
                "register",
                "requester",
                "--first-name",
                "Alice",
                "--last-name",
                "Martin",
                "--nne",
                "123456789",
                "--phone",
                "0612345678",
                "--email",
                "alice@example.fr",
                "--voting-bureau",
                "3",
                "--no-newsletter",
            ],
        )

        assert result.exit_code == 0, result.output
        assert str(created.id) in result.output
        assert "pas été notifiée" in result.output
        dto = use_case.execute.await_args.args[0]
        assert dto.type is ParticipantType.REQUESTER
        assert dto.fields.voting_bureau == 3
        assert dto.fields.newsletter_consent is False
        assert dto.fields.support_committee_consent is True


class TestMatchCommands:
    def test_matches_renders_placeholder(self, runner, use_case):
        use_case.list_matches.return_value = ListMatchesOutputDto(
            matches=[_match_item(volunteer_found=False)]
        )

        result = runner.invoke(cli, ["matches"])

        assert result.exit_code == 0, result.output
        assert "Binômes (1)" in result.output
        assert "(inconnu)" in result.output

    def test_propose(self, runner, use_case):
        item = _match_item()
        use_case.propose.return_value = ProposeMatchOutputDto(match=item)

        result = runner.invoke(
            cli, ["propose", str(item.requester.id), str(item.volunteer.id)]
        )

        assert result.exit_code == 0, result.output
        assert "Binôme proposé" in result.output
        dto = use_case.propose.await_args.args[0]
        assert dto.requester_id == item.requester.id
        assert dto.volunteer_id == item.volunteer.id

    def test_propose_conflict_exits_with_error(self, runner, use_case):
        use_case.propose.side_effect = ConflictError(
            "Alice Martin fait déjà partie d'un binôme"
        )

        result = runner.invoke(cli, ["propose", str(uuid4()), str(uuid4())])

        assert result.exit_code == 1
        assert "fait déjà partie d'un binôme" in result.output

    def test_propose_rejects_malformed_id(self, runner, use_case):
        result = runner.invoke(cli, ["propose", "not-a-uuid", str(uuid4())])

        assert result.exit_code == 2
        use_case.propose.assert_not_awaited()

    def test_confirm(self, runner, use_case):
        item = _match_item(status="confirmed")
        use_case.confirm.return_value = ConfirmMatchOutputDto(
            match=item,
            outcome=ConfirmOutcome(
                match_id=item.id,  # type: ignore[arg-type]
                notification_sent=True,
                match_confirmed=True,
                participants_matched=True,
            ),
        )

        result = runner.invoke(cli, ["confirm", str(item.id), "--actor", "admin-1"])

        assert result.exit_code == 0, result.output
        assert "Les emails ont été envoyés" in result.output
        dto = use_case.confirm.await_args.args[0]
        assert dto.match_id == item.id
        assert dto.actor_id == "admin-1"

    def test_confirm_notification_failure(self, runner, use_case):
        use_case.confirm.side_effect = NotificationError(
            "Erreur lors de l'envoi des emails"
        )

        result = runner.invoke(cli, ["confirm", str(uuid4())])

        assert result.exit_code == 1
        assert "Erreur lors de l'envoi des emails" in result.output

    def test_confirm_partial_failure_shows_outcome(self, runner, use_case):
        match_id = uuid4()
        use_case.confirm.side_effect = PartialConfirmationError(
            "Les emails ont été envoyés mais la mise à jour des statuts a échoué.",
            ConfirmOutcome(
                match_id=match_id, notification_sent=True, match_confirmed=True
            ),
        )

        result = runner.invoke(cli, ["confirm", str(match_id)])

        assert result.exit_code == 1
        assert "emails envoyés: oui" in result.output
        assert "binôme confirmé: oui" in result.output
        assert "statuts mis à jour: non" in result.output

    def test_dissolve_requires_confirmation(self, runner, use_case):
        match_id = uuid4()

        aborted = runner.invoke(cli, ["dissolve", str(match_id)], input="n\n")
        confirmed = runner.invoke(cli, ["dissolve", str(match_id), "--yes"])

        assert aborted.exit_code == 1
        assert confirmed.exit_code == 0, confirmed.output
        use_case.dissolve.assert_awaited_once_with(match_id)

    def test_unexpected_error(self, runner, use_case):
        use_case.list_matches.side_effect = RuntimeError("boom")

        result = runner.invoke(cli, ["matches"])

        assert result.exit_code == 1
        assert "Erreur inattendue" in result.output


class TestStatsCommand:
    def test_stats(self, runner, use_case):
        use_case.get_statistics.return_value = ProxyStatisticsOutputDto(
            requesters_total=5,
            requesters_pending=3,
            requesters_matched=2,
            volunteers_total=4,
            matches_pending=1,
            matches_confirmed=2,
        )

        result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 0, result.output
        assert "Mandants     : 5" in result.output
        assert "1 en attente, 2 confirmés" in result.output


def test_confirmed_at_is_rendered(runner, use_case):
    item = _match_item(status="confirmed")
    item.confirmed_at = datetime(2026, 3, 1, 18, 30, tzinfo=UTC)
    item.confirmed_by = "admin-1"
    use_case.list_matches.return_value = ListMatchesOutputDto(matches=[item])

    result = runner.invoke(cli, ["matches"])

    assert "Confirmé le 01/03/2026 18:30 par admin-1" in result.output


def test_invalid_configuration_is_reported(runner, use_case):
    with patch(
        "src.interfaces.cli.main.get_settings",
        side_effect=ValueError("Invalid PROXY_NOTIFICATION_DELIVERY: 'exactly_once'"),
    ):
        result = runner.invoke(cli, ["stats"])

    assert result.exit_code == 1
    assert "Invalid PROXY_NOTIFICATION_DELIVERY" in result.output
    use_case.get_statistics.assert_not_awaited()
