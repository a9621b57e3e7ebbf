"""Mailjet Send API v3.1 client.

Minimal httpx async client: one request per message, any non-2xx answer
becomes an EmailDeliveryError.
"""

from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import Any

import httpx

from src.infrastructure.exceptions import EmailDeliveryError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailjetMessage:
    """A single HTML email."""

    to_email: str
    subject: str
    html: str
    to_name: str | None = None

    def to_payload(self, from_email: str, from_name: str) -> dict[str, Any]:
        recipient: dict[str, str] = {"Email": self.to_email}
        if self.to_name:
            recipient["Name"] = self.to_name
        return {
            "From": {"Email": from_email, "Name": from_name},
            "To": [recipient],
            "Subject": self.subject,
            "HTMLPart": self.html,
        }


class MailjetClient:
    """Mailjet Send API client (httpx async)."""

    SEND_URL = "https://api.mailjet.com/v3.1/send"

    def __init__(
        self,
        api_key: str | None,
        secret_key: str | None,
        from_email: str,
        from_name: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.secret_key = secret_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        self._external_client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.secret_key)

    async def send(self, message: MailjetMessage) -> None:
        """Send one email.

        Raises:
            EmailDeliveryError: Missing credentials, transport failure or a
                non-2xx answer from Mailjet
        """
        if not self.is_configured:
            raise EmailDeliveryError(
                "Email service not configured (MAILJET_API_KEY / MAILJET_SECRET_KEY)."
            )
        if not message.to_email:
            raise EmailDeliveryError("Recipient email is required")

        body = {"Messages": [message.to_payload(self.from_email, self.from_name)]}
        auth = httpx.BasicAuth(self.api_key or "", self.secret_key or "")

        if self._external_client is not None:
            response = await self._post(self._external_client, body, auth)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await self._post(client, body, auth)

        if not response.is_success:
            logger.error(
                "Mailjet API error: %d %s", response.status_code, response.text
            )
            raise EmailDeliveryError(
                f"Mailjet API error: {response.status_code} {response.text}",
                status_code=response.status_code,
            )
        logger.debug("Mailjet accepted email to %s", message.to_email)

    async def _post(
        self, client: httpx.AsyncClient, body: dict[str, Any], auth: httpx.BasicAuth
    ) -> httpx.Response:
        try:
            return await client.post(self.SEND_URL, json=body, auth=auth)
        except httpx.HTTPError as e:
            logger.error("Mailjet request failed: %s", e)
            raise EmailDeliveryError(f"Mailjet request failed: {e}") from e
