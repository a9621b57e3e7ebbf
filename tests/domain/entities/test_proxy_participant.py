"""Tests for the ProxyParticipant entity."""

from uuid import uuid4

import pytest

from src.domain.entities import ProxyParticipant
from src.domain.exceptions import ValidationError
from src.domain.value_objects.proxy_status import ParticipantStatus, ParticipantType
from tests.fixtures.proxy_factories import (
    make_fields,
    make_participant,
    make_requester,
    make_volunteer,
)


class TestProxyParticipant:
    def test_initialization_defaults(self) -> None:
        participant = ProxyParticipant(
            type="requester",
            first_name="Alice",
            last_name="Martin",
            national_elector_number="123",
            phone="0612345678",
            email="alice@example.fr",
        )

        assert participant.id is None
        assert participant.type is ParticipantType.REQUESTER
        assert participant.status is ParticipantStatus.PENDING
        assert participant.disabled is False
        assert participant.voting_bureau is None
        assert participant.support_committee_consent is True
        assert participant.newsletter_consent is True

    def test_string_values_are_coerced_to_enums(self) -> None:
        participant = make_participant(type="volunteer", status="matched")  # type: ignore[arg-type]

        assert participant.type is ParticipantType.VOLUNTEER
        assert participant.status is ParticipantStatus.MATCHED
        assert participant.is_volunteer
        assert participant.is_matched

    def test_unknown_type_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_participant(type="observer")  # type: ignore[arg-type]

    def test_type_cannot_be_changed(self) -> None:
        participant = make_requester()

        with pytest.raises(ValidationError) as exc_info:
            participant.type = ParticipantType.VOLUNTEER

        assert "ne peut pas être modifié" in exc_info.value.message
        assert participant.type is ParticipantType.REQUESTER

    def test_assigning_same_type_is_a_no_op(self) -> None:
        participant = make_volunteer()

        participant.type = "volunteer"  # type: ignore[assignment]

        assert participant.type is ParticipantType.VOLUNTEER

    def test_full_name(self) -> None:
        participant = make_requester(first_name="Jeanne", last_name="Leroy")

        assert participant.full_name == "Jeanne Leroy"
        assert str(participant) == "ProxyParticipant(requester, Jeanne Leroy)"

    def test_available_when_enabled_and_not_held(self) -> None:
        participant = make_requester()

        assert participant.is_available_for_matching(set())
        assert participant.is_available_for_matching({uuid4()})

    def test_not_available_when_held_by_active_match(self) -> None:
        participant = make_requester()

        assert not participant.is_available_for_matching({participant.id})

    def test_not_available_when_disabled(self) -> None:
        participant = make_requester(disabled=True)

        assert not participant.is_available_for_matching(set())

    def test_apply_fields_overwrites_editable_fields_only(self) -> None:
        participant = make_volunteer(status=ParticipantStatus.MATCHED, disabled=True)
        fields = make_fields(
            first_name="Louise",
            last_name="Petit",
            national_elector_number="42",
            phone="0700000000",
            email="louise@example.fr",
            voting_bureau=3,
            support_committee_consent=False,
            newsletter_consent=True,
        )

        participant.apply_fields(fields)

        assert participant.full_name == "Louise Petit"
        assert participant.national_elector_number == "42"
        assert participant.phone == "0700000000"
        assert participant.email == "louise@example.fr"
        assert participant.voting_bureau == 3
        assert participant.support_committee_consent is False
        assert participant.newsletter_consent is True
        assert participant.type is ParticipantType.VOLUNTEER
        assert participant.status is ParticipantStatus.MATCHED
        assert participant.disabled is True

    def test_to_contact(self) -> None:
        participant = make_requester(phone="06 01 02 03 04", email="a@example.fr")

        contact = participant.to_contact()

        assert contact.id == participant.id
        assert contact.full_name == participant.full_name
        assert contact.phone == "06 01 02 03 04"
        assert contact.email == "a@example.fr"

    def test_from_fields_builds_pending_enabled_participant(self) -> None:
        participant = ProxyParticipant.from_fields(
            ParticipantType.VOLUNTEER, make_fields(voting_bureau=2)
        )

        assert participant.id is None
        assert participant.type is ParticipantType.VOLUNTEER
        assert participant.status is ParticipantStatus.PENDING
        assert participant.disabled is False
        assert participant.voting_bureau == 2

    def test_equality_by_id(self) -> None:
        participant_id = uuid4()
        a = make_requester(id=participant_id)
        b = make_requester(id=participant_id, first_name="Autre")

        assert a == b
        assert a != make_requester()
