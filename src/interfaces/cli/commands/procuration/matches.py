"""Match commands: list, propose, confirm and dissolve."""

import asyncio

from uuid import UUID

import click

from src.application.dtos.proxy_matching_dto import (
    ConfirmMatchInputDto,
    MatchOutputItem,
    ProposeMatchInputDto,
)
from src.interfaces.cli.base import echo_success, echo_warning, with_error_handling


_STATUS_LABELS = {"pending": "En attente", "confirmed": "Confirmé"}


def format_match(item: MatchOutputItem) -> list[str]:
    """Table lines for a match."""
    status = _STATUS_LABELS.get(item.status, item.status)
    lines = [f"  {item.id}  [{status}]"]
    for label, person in (("Mandant", item.requester), ("Mandataire", item.volunteer)):
        if person.found:
            lines.append(
                f"    {label:<11} {person.full_name} "
                f"({person.email}, {person.phone}) NNE {person.national_elector_number}"
            )
        else:
            lines.append(f"    {label:<11} {person.full_name} ({person.id})")
    if item.confirmed_at:
        by = f" par {item.confirmed_by}" if item.confirmed_by else ""
        lines.append(
            f"    Confirmé le {item.confirmed_at.strftime('%d/%m/%Y %H:%M')}{by}"
        )
    return lines


@click.command()
@with_error_handling
def matches():
    """Lister les binômes."""
    asyncio.run(_matches())


async def _matches() -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        result = await use_case.list_matches()

    click.echo(f"=== Binômes ({len(result.matches)}) ===")
    if not result.matches:
        click.echo("Aucun binôme pour le moment.")
        return
    for item in result.matches:
        for line in format_match(item):
            click.echo(line)


@click.command()
@click.argument("requester_id", type=click.UUID)
@click.argument("volunteer_id", type=click.UUID)
@with_error_handling
def propose(requester_id: UUID, volunteer_id: UUID):
    """Proposer un binôme entre un mandant et un mandataire."""
    asyncio.run(_propose(requester_id, volunteer_id))


async def _propose(requester_id: UUID, volunteer_id: UUID) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        result = await use_case.propose(
            ProposeMatchInputDto(requester_id=requester_id, volunteer_id=volunteer_id)
        )

    echo_success(
        f"Binôme proposé : {result.match.requester.full_name} / "
        f"{result.match.volunteer.full_name} ({result.match.id})"
    )


@click.command()
@click.argument("match_id", type=click.UUID)
@click.option("--actor", help="Identifiant de la personne qui confirme")
@with_error_handling
def confirm(match_id: UUID, actor: str | None):
    """Confirmer un binôme et envoyer les coordonnées aux deux personnes."""
    asyncio.run(_confirm(match_id, actor))


async def _confirm(match_id: UUID, actor: str | None) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        result = await use_case.confirm(
            ConfirmMatchInputDto(match_id=match_id, actor_id=actor)
        )

    if result.outcome.notification_skipped:
        echo_warning("Emails déjà envoyés précédemment, aucun nouvel envoi.")
        echo_success("Binôme confirmé.")
    else:
        echo_success("Binôme confirmé ! Les emails ont été envoyés.")


@click.command()
@click.argument("match_id", type=click.UUID)
@click.confirmation_option(prompt="Casser ce binôme ?")
@with_error_handling
def dissolve(match_id: UUID):
    """Casser un binôme (les deux personnes repassent en attente)."""
    asyncio.run(_dissolve(match_id))


async def _dissolve(match_id: UUID) -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        await use_case.dissolve(match_id)
    echo_success("Binôme cassé.")
