"""Team notifications posted to a Discord webhook."""

from __future__ import annotations

import logging

from datetime import UTC, datetime
from typing import Any

import httpx

from src.domain.entities.proxy_participant import ProxyParticipant
from src.infrastructure.exceptions import WebhookError


logger = logging.getLogger(__name__)


EMBED_COLOR = 3447003


class DiscordWebhookNotifier:
    """Announces new procuration registrations on the team's Discord."""

    USERNAME = "Espace procuration"

    def __init__(
        self,
        webhook_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        page_url: str | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.page_url = page_url
        self._external_client = client

    async def notify_registration(self, participant: ProxyParticipant) -> None:
        """Post an embed describing the new participant.

        Raises:
            WebhookError: Transport failure or non-2xx answer
        """
        await self.send(
            title=self._title(participant),
            description=self._describe(participant),
        )

    async def send(self, title: str, description: str) -> None:
        embed: dict[str, Any] = {
            "title": title,
            "description": description,
            "color": EMBED_COLOR,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        if self.page_url:
            embed["url"] = self.page_url
        body = {"username": self.USERNAME, "embeds": [embed]}

        try:
            if self._external_client is not None:
                response = await self._external_client.post(self.webhook_url, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.webhook_url, json=body)
        except httpx.HTTPError as e:
            raise WebhookError(f"Discord webhook request failed: {e}") from e

        if not response.is_success:
            raise WebhookError(
                f"Discord webhook error: {response.status_code} {response.text}",
                status_code=response.status_code,
            )
        logger.info(f"Discord webhook delivered: {title}")

    @staticmethod
    def _title(participant: ProxyParticipant) -> str:
        if participant.is_requester:
            return "🗳️ Procuration – Quelqu'un cherche un mandataire"
        return "🗳️ Procuration – Quelqu'un propose de porter une procuration"

    @staticmethod
    def _describe(participant: ProxyParticipant) -> str:
        bureau = (
            f"Bureau {participant.voting_bureau}"
            if participant.voting_bureau is not None
            else "Non renseigné"
        )
        lines = [
            f"**{participant.full_name}**",
            f"**Email**: {participant.email}",
            f"**Tél.**: {participant.phone}",
            f"**NNE**: {participant.national_elector_number}",
            f"**Bureau de vote**: {bureau}",
            "**Comité de soutien**: "
            + ("Oui" if participant.support_committee_consent else "Non"),
            "**Newsletter**: " + ("Oui" if participant.newsletter_consent else "Non"),
        ]
        return "\n".join(lines)
