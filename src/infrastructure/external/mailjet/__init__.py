"""Mailjet email delivery."""

from src.infrastructure.external.mailjet.client import MailjetClient, MailjetMessage
from src.infrastructure.external.mailjet.proxy_notification_service import (
    MailjetProxyNotificationService,
)


__all__ = [
    "MailjetClient",
    "MailjetMessage",
    "MailjetProxyNotificationService",
]
