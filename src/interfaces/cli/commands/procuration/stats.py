"""Dashboard counters."""

import asyncio

import click

from src.interfaces.cli.base import with_error_handling


@click.command()
@with_error_handling
def stats():
    """Afficher les statistiques des procurations."""
    asyncio.run(_stats())


async def _stats() -> None:
    from src.interfaces.factories.proxy_matching_factory import (
        manage_proxy_matches_usecase,
    )

    async with manage_proxy_matches_usecase() as use_case:
        s = await use_case.get_statistics()

    click.echo("=== Procurations ===")
    click.echo(
        f"Mandants     : {s.requesters_total} "
        f"(en attente {s.requesters_pending}, appariés {s.requesters_matched}, "
        f"désactivés {s.requesters_disabled}, disponibles {s.requesters_available})"
    )
    click.echo(
        f"Mandataires  : {s.volunteers_total} "
        f"(en attente {s.volunteers_pending}, appariés {s.volunteers_matched}, "
        f"désactivés {s.volunteers_disabled}, disponibles {s.volunteers_available})"
    )
    click.echo(
        f"Binômes      : {s.matches_pending} en attente, "
        f"{s.matches_confirmed} confirmés"
    )
