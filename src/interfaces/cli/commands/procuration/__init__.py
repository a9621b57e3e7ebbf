"""Procuration matching commands."""

from src.interfaces.cli.commands.procuration.matches import (
    confirm,
    dissolve,
    matches,
    propose,
)
from src.interfaces.cli.commands.procuration.participants import (
    available,
    disable,
    edit,
    enable,
    register,
    requesters,
    volunteers,
)
from src.interfaces.cli.commands.procuration.stats import stats


def get_procuration_commands():
    """Get all procuration commands."""
    return [
        requesters,
        volunteers,
        available,
        edit,
        enable,
        disable,
        register,
        matches,
        propose,
        confirm,
        dissolve,
        stats,
    ]


__all__ = ["get_procuration_commands"]
