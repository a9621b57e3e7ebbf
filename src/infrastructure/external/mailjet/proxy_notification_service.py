"""Match notification dispatcher backed by Mailjet."""

from __future__ import annotations

import logging

from uuid import UUID

from src.domain.value_objects.proxy_contact import ProxyContact
from src.infrastructure.exceptions import EmailDeliveryError
from src.infrastructure.external.mailjet.client import MailjetClient, MailjetMessage
from src.infrastructure.external.mailjet.templates import (
    build_email_to_requester,
    build_email_to_volunteer,
)


logger = logging.getLogger(__name__)


class MailjetProxyNotificationService:
    """Sends the two contact emails of a confirmed match.

    The requester's email goes first. If it fails nothing else is sent; if
    the volunteer's email fails the requester has already been notified, so
    retrying sends the requester a second copy.
    """

    def __init__(self, client: MailjetClient, election_label: str) -> None:
        self.client = client
        self.election_label = election_label

    async def notify_match(
        self,
        match_id: UUID,
        requester: ProxyContact,
        volunteer: ProxyContact,
    ) -> None:
        """Dispatch the contact emails of a match.

        Raises:
            EmailDeliveryError: A participant has no email, Mailjet is not
                configured or rejected a message
        """
        if not requester.email or not volunteer.email:
            raise EmailDeliveryError(
                "requester and volunteer with email are required",
                details={"match_id": str(match_id)},
            )

        sender = self.client.from_name
        subject, html = build_email_to_requester(
            requester, volunteer, self.election_label, sender
        )
        await self.client.send(
            MailjetMessage(
                to_email=requester.email,
                to_name=requester.full_name,
                subject=subject,
                html=html,
            )
        )

        subject, html = build_email_to_volunteer(
            requester, volunteer, self.election_label, sender
        )
        await self.client.send(
            MailjetMessage(
                to_email=volunteer.email,
                to_name=volunteer.full_name,
                subject=subject,
                html=html,
            )
        )
        logger.info("Proxy match emails sent for match %s", match_id)
