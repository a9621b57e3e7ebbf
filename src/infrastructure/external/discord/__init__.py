"""Discord webhook notifications."""

from src.infrastructure.external.discord.webhook_notifier import DiscordWebhookNotifier


__all__ = ["DiscordWebhookNotifier"]
