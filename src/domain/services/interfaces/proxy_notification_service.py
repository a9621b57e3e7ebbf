"""Match notification dispatcher interface."""

from typing import Protocol
from uuid import UUID

from src.domain.value_objects.proxy_contact import ProxyContact


class IProxyNotificationService(Protocol):
    """Sends each matched participant the other's contact details."""

    async def notify_match(
        self,
        match_id: UUID,
        requester: ProxyContact,
        volunteer: ProxyContact,
    ) -> None:
        """Dispatch the contact emails of a match.

        Implementations are not assumed idempotent.

        Raises:
            NotificationError: If any email could not be delivered
        """
        ...
