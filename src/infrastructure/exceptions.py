"""Infrastructure layer exceptions.

Adapters translate library errors (SQLAlchemy, httpx) into these types so
that the application layer only ever sees domain exception classes.
"""

from typing import Any

from src.domain.exceptions import NotificationError, StoreError


class DatabaseError(StoreError):
    """A database operation failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)


class UpdateError(DatabaseError):
    """An update targeted a row that does not exist."""


class EmailDeliveryError(NotificationError):
    """The email provider rejected or failed to send a message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class WebhookError(Exception):
    """A team notification webhook call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
