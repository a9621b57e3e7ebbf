"""Shared helpers for CLI commands."""

import functools
import sys

from collections.abc import Callable
from typing import Any, TypeVar

import click

from src.common.logging import get_logger
from src.domain.exceptions import PartialConfirmationError, ProxyMatchingError


logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def echo_success(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg="green"))


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_error(message: str) -> None:
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)


def with_error_handling(func: F) -> F:
    """Render workflow errors as a red message and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PartialConfirmationError as e:
            echo_error(e.message)
            outcome = e.outcome
            echo_warning(
                f"emails envoyés: {'oui' if outcome.notification_sent else 'non'}, "
                f"binôme confirmé: {'oui' if outcome.match_confirmed else 'non'}, "
                f"statuts mis à jour: {'oui' if outcome.participants_matched else 'non'}"
            )
            sys.exit(1)
        except ProxyMatchingError as e:
            echo_error(e.message)
            sys.exit(1)
        except click.ClickException:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}")
            echo_error(f"Erreur inattendue: {e}")
            sys.exit(1)

    return wrapper  # type: ignore[return-value]
