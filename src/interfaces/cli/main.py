"""Command line entry point."""

import click

from src.common.logging import setup_logging
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.commands.procuration import get_procuration_commands


@click.group(name="procuration")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
@click.option("--json-logs", is_flag=True, help="Logs au format JSON")
def cli(log_level: str | None, json_logs: bool):
    """Gestion des procurations (mandants, mandataires, binômes)."""
    try:
        settings = get_settings()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    setup_logging(
        level=log_level or settings.log_level,
        json_format=json_logs or settings.log_format == "json",
    )


for command in get_procuration_commands():
    cli.add_command(command)


if __name__ == "__main__":
    cli()
