"""Team notification interface."""

from typing import Protocol

from src.domain.entities.proxy_participant import ProxyParticipant


class IAdminNotificationService(Protocol):
    """Tells the organizing team about new procuration registrations."""

    async def notify_registration(self, participant: ProxyParticipant) -> None:
        """Announce a new requester or volunteer."""
        ...
