"""Participant commands: listing, editing, disabling and registering."""

import asyncio

from uuid import UUID

import click

from src.application.dtos.proxy_matching_dto import (
    ListParticipantsInputDto,
    ParticipantOutputItem,
    RegisterParticipantInputDto,
    UpdateParticipantInputDto,
)
from src.domain.value_objects.participant_fields import ParticipantFields
from src.domain.value_objects.proxy_status import ParticipantType, StatusFilter
from src.interfaces.cli.base import echo_success, echo_warning, with_error_handling


_TYPE_LABELS = {
    ParticipantType.REQUESTER: "mandants",
    ParticipantType.VOLUNTEER: "mandataires",
}


def format_participant(item: ParticipantOutputItem) -> str:
    """One table line for a participant."""
    bureau = f"Bureau {item.voting_bureau}" if item.voting_bureau else "—"
    state = "désactivé" if item.disabled else item.status
    created = item.created_at.strftime("%d/%m/%Y") if item.created_at else ""
    return (
        f"  {item.id}  {item.full_name:<30} {item.national_elector_number:<15} "
        f"{item.phone:<16} {item.email:<32} {bureau:<9} {state:<10} {created}"
    )


def _status_option():
    return click.option(
        "--status",
        "status_filter",
        type=click.Choice([s.value for s in StatusFilter]),
        default=StatusFilter.PENDING.value,
        show_default=True,
        help="Filtrer par statut",
    )


async def _list(
    type: ParticipantType,
    status_filter: str,
    include_disabled: bool,
    search: str | None,
) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        result = await use_case.list_participants(
            ListParticipantsInputDto(
                type=type,
                status_filter=StatusFilter(status_filter),
                include_disabled=include_disabled,
                search=search,
            )
        )

    label = _TYPE_LABELS[type]
    click.echo(
        f"=== {label.capitalize()} ({len(result.participants)} / {result.total}) ==="
    )
    if not result.participants:
        click.echo(f"Aucun {label[:-1]} ne correspond aux filtres.")
        return
    for item in result.participants:
        click.echo(format_participant(item))


@click.command()
@_status_option()
@click.option("--include-disabled", is_flag=True, help="Inclure les désactivés")
@click.option("--search", help="Rechercher par nom, NNE, email ou téléphone")
@with_error_handling
def requesters(status_filter: str, include_disabled: bool, search: str | None):
    """Lister les mandants."""
    asyncio.run(
        _list(ParticipantType.REQUESTER, status_filter, include_disabled, search)
    )


@click.command()
@_status_option()
@click.option("--include-disabled", is_flag=True, help="Inclure les désactivés")
@click.option("--search", help="Rechercher par nom, NNE, email ou téléphone")
@with_error_handling
def volunteers(status_filter: str, include_disabled: bool, search: str | None):
    """Lister les mandataires."""
    asyncio.run(
        _list(ParticipantType.VOLUNTEER, status_filter, include_disabled, search)
    )


@click.command()
@click.argument("type", type=click.Choice([t.value for t in ParticipantType]))
@click.option(
    "--include-disabled", is_flag=True, help="Inclure les désactivés (audit)"
)
@with_error_handling
def available(type: str, include_disabled: bool):
    """Lister les personnes disponibles pour un nouveau binôme."""
    asyncio.run(_available(ParticipantType(type), include_disabled))


async def _available(type: ParticipantType, include_disabled: bool) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        items = await use_case.list_available(
            type, exclude_disabled=not include_disabled
        )

    click.echo(f"=== {_TYPE_LABELS[type].capitalize()} disponibles ({len(items)}) ===")
    for item in items:
        click.echo(format_participant(item))


@click.command()
@click.argument("participant_id", type=click.UUID)
@with_error_handling
def disable(participant_id: UUID):
    """Désactiver une personne (casse son binôme éventuel)."""
    asyncio.run(_disable(participant_id))


async def _disable(participant_id: UUID) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        result = await use_case.disable(participant_id)

    if result.dissolved_match_id:
        echo_warning(
            f"Binôme {result.dissolved_match_id} cassé, "
            f"{result.released_participant_id} est de nouveau en attente"
        )
    echo_success(
        "Personne désactivée. Elle n'apparaîtra plus dans les listes de matching."
    )


@click.command()
@click.argument("participant_id", type=click.UUID)
@with_error_handling
def enable(participant_id: UUID):
    """Réactiver une personne."""
    asyncio.run(_enable(participant_id))


async def _enable(participant_id: UUID) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        await use_case.enable(participant_id)
    echo_success("Personne réactivée.")


@click.command()
@click.argument("participant_id", type=click.UUID)
@click.option("--first-name")
@click.option("--last-name")
@click.option("--nne", "national_elector_number", help="Numéro national d'électeur")
@click.option("--phone")
@click.option("--email")
@click.option("--voting-bureau", type=click.IntRange(0, 3), help="0 pour effacer")
@click.option("--support-committee/--no-support-committee", default=None)
@click.option("--newsletter/--no-newsletter", default=None)
@with_error_handling
def edit(
    participant_id: UUID,
    first_name: str | None,
    last_name: str | None,
    national_elector_number: str | None,
    phone: str | None,
    email: str | None,
    voting_bureau: int | None,
    support_committee: bool | None,
    newsletter: bool | None,
):
    """Modifier la fiche d'une personne."""
    asyncio.run(
        _edit(
            participant_id,
            first_name=first_name,
            last_name=last_name,
            national_elector_number=national_elector_number,
            phone=phone,
            email=email,
            voting_bureau=voting_bureau,
            support_committee=support_committee,
            newsletter=newsletter,
        )
    )


async def _edit(
    participant_id: UUID,
    first_name: str | None,
    last_name: str | None,
    national_elector_number: str | None,
    phone: str | None,
    email: str | None,
    voting_bureau: int | None,
    support_committee: bool | None,
    newsletter: bool | None,
) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        current = await use_case.get_participant(participant_id)
        if voting_bureau is None:
            bureau = current.voting_bureau
        else:
            bureau = voting_bureau or None
        fields = ParticipantFields(
            first_name=first_name if first_name is not None else current.first_name,
            last_name=last_name if last_name is not None else current.last_name,
            national_elector_number=(
                national_elector_number
                if national_elector_number is not None
                else current.national_elector_number
            ),
            phone=phone if phone is not None else current.phone,
            email=email if email is not None else current.email,
            voting_bureau=bureau,
            support_committee_consent=(
                support_committee
                if support_committee is not None
                else current.support_committee_consent
            ),
            newsletter_consent=(
                newsletter if newsletter is not None else current.newsletter_consent
            ),
        )
        updated = await use_case.update_participant(
            UpdateParticipantInputDto(participant_id=participant_id, fields=fields)
        )

    echo_success("Fiche mise à jour.")
    click.echo(format_participant(updated))


@click.command()
@click.argument("type", type=click.Choice([t.value for t in ParticipantType]))
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--nne", "national_elector_number", required=True)
@click.option("--phone", required=True)
@click.option("--email", required=True)
@click.option("--voting-bureau", type=click.IntRange(1, 3))
@click.option("--support-committee/--no-support-committee", default=True)
@click.option("--newsletter/--no-newsletter", default=True)
@with_error_handling
def register(
    type: str,
    first_name: str,
    last_name: str,
    national_elector_number: str,
    phone: str,
    email: str,
    voting_bureau: int | None,
    support_committee: bool,
    newsletter: bool,
):
    """Inscrire un mandant ou un mandataire."""
    fields = ParticipantFields(
        first_name=first_name,
        last_name=last_name,
        national_elector_number=national_elector_number,
        phone=phone,
        email=email,
        voting_bureau=voting_bureau,
        support_committee_consent=support_committee,
        newsletter_consent=newsletter,
    )
    asyncio.run(_register(ParticipantType(type), fields))


async def _register(type: ParticipantType, fields: ParticipantFields) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        register_proxy_participant_usecase,
    )

    async with register_proxy_participant_usecase() as use_case:
        result = await use_case.execute(
            RegisterParticipantInputDto(type=type, fields=fields)
        )

    echo_success(f"Inscription enregistrée ({result.participant.id}).")
    if not result.team_notified:
        echo_warning("L'équipe n'a pas été notifiée.")
