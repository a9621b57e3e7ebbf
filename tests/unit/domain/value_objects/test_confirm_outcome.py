"""Tests for ConfirmOutcome and the procuration enums."""

from uuid import uuid4

import pytest

from src.domain.value_objects.confirm_outcome import ConfirmOutcome
from src.domain.value_objects.participant_fields import ParticipantFields
from src.domain.value_objects.proxy_status import MatchStatus


class TestConfirmOutcome:
    def test_fully_applied(self):
        outcome = ConfirmOutcome(
            match_id=uuid4(),
            notification_sent=True,
            match_confirmed=True,
            participants_matched=True,
        )

        assert not outcome.partially_applied

    def test_sent_but_match_not_confirmed(self):
        outcome = ConfirmOutcome(match_id=uuid4(), notification_sent=True)

        assert outcome.partially_applied

    def test_skipped_dispatch_counts_as_delivered(self):
        outcome = ConfirmOutcome(
            match_id=uuid4(),
            notification_sent=False,
            notification_skipped=True,
            match_confirmed=True,
        )

        assert outcome.partially_applied

    def test_nothing_sent(self):
        outcome = ConfirmOutcome(match_id=uuid4(), notification_sent=False)

        assert not outcome.partially_applied

    def test_is_frozen(self):
        outcome = ConfirmOutcome(match_id=uuid4(), notification_sent=True)

        with pytest.raises(AttributeError):
            outcome.match_confirmed = True  # type: ignore[misc]


class TestEnums:
    def test_active_match_statuses(self):
        assert set(MatchStatus.active()) == {
            MatchStatus.PENDING,
            MatchStatus.CONFIRMED,
        }


class TestParticipantFields:
    def test_normalized_strips_text_fields(self):
        fields = ParticipantFields(
            first_name=" Anne ",
            last_name=" Roux",
            national_elector_number="123 ",
            phone=" 0612345678 ",
            email=" anne@example.fr",
            voting_bureau=2,
            support_committee_consent=False,
            newsletter_consent=False,
        )

        normalized = fields.normalized()

        assert normalized.first_name == "Anne"
        assert normalized.last_name == "Roux"
        assert normalized.national_elector_number == "123"
        assert normalized.phone == "0612345678"
        assert normalized.email == "anne@example.fr"
        assert normalized.voting_bureau == 2
        assert normalized.support_committee_consent is False
        assert normalized.newsletter_consent is False
