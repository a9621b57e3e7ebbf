"""Domain exceptions for the procuration matching workflow.

Every error raised by the matching engine derives from ProxyMatchingError so
the administration surface can render a human-readable message for any of
them.
"""

from typing import Any


class ProxyMatchingError(Exception):
    """Base class for matching workflow errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(ProxyMatchingError):
    """Malformed or missing identifiers or fields."""


class ConflictError(ProxyMatchingError):
    """An invariant would be violated (participant already matched, match
    already confirmed)."""


class NotFoundError(ProxyMatchingError):
    """A referenced participant or match does not exist."""


class NotificationError(ProxyMatchingError):
    """The external notification dispatch failed."""


class StoreError(ProxyMatchingError):
    """The underlying persistence call failed."""


class PartialConfirmationError(StoreError):
    """Confirmation emails were sent but the status writes did not all land.

    The outcome attribute tells the operator which writes were applied so the
    records can be reconciled by hand.
    """

    def __init__(
        self,
        message: str,
        outcome: Any,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.outcome = outcome
