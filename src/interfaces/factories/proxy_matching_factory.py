"""Factories wiring the procuration use cases to their adapters."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.application.usecases.manage_proxy_matches_usecase import (
    ManageProxyMatchesUseCase,
)
from src.application.usecases.register_proxy_participant_usecase import (
    RegisterProxyParticipantUseCase,
)
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.external.discord import DiscordWebhookNotifier
from src.infrastructure.external.mailjet import (
    MailjetClient,
    MailjetProxyNotificationService,
)
from src.infrastructure.persistence.proxy_match_repository_impl import (
    ProxyMatchRepositoryImpl,
)
from src.infrastructure.persistence.proxy_participant_repository_impl import (
    ProxyParticipantRepositoryImpl,
)


def create_notification_service(
    settings: Settings,
) -> MailjetProxyNotificationService:
    """Build the Mailjet-backed match notification dispatcher."""
    client = MailjetClient(
        api_key=settings.mailjet_api_key,
        secret_key=settings.mailjet_secret_key,
        from_email=settings.proxy_from_email,
        from_name=settings.proxy_from_name,
        timeout=settings.http_timeout,
    )
    return MailjetProxyNotificationService(
        client, election_label=settings.proxy_election_label
    )


def create_admin_notification_service(
    settings: Settings,
) -> DiscordWebhookNotifier | None:
    """Build the Discord notifier, or None when no webhook is configured."""
    if not settings.discord_webhook_url:
        return None
    return DiscordWebhookNotifier(
        settings.discord_webhook_url,
        timeout=settings.http_timeout,
        page_url=settings.proxy_page_url,
    )


@asynccontextmanager
async def manage_proxy_matches_usecase(
    settings: Settings | None = None,
) -> AsyncGenerator[ManageProxyMatchesUseCase]:
    """Yield a matching engine bound to a fresh database session."""
    settings = settings or get_settings()
    database = AsyncDatabase(settings.database_url)
    try:
        async with database.get_session() as session:
            yield ManageProxyMatchesUseCase(
                participant_repository=ProxyParticipantRepositoryImpl(session),
                match_repository=ProxyMatchRepositoryImpl(session),
                notification_service=create_notification_service(settings),
                notification_delivery=settings.notification_delivery,
            )
    finally:
        await database.dispose()


@asynccontextmanager
async def register_proxy_participant_usecase(
    settings: Settings | None = None,
) -> AsyncGenerator[RegisterProxyParticipantUseCase]:
    """Yield a registration use case bound to a fresh database session."""
    settings = settings or get_settings()
    database = AsyncDatabase(settings.database_url)
    try:
        async with database.get_session() as session:
            yield RegisterProxyParticipantUseCase(
                participant_repository=ProxyParticipantRepositoryImpl(session),
                admin_notification_service=create_admin_notification_service(
                    settings
                ),
            )
    finally:
        await database.dispose()
