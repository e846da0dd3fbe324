"""Build engine collaborators from Settings.

Usage:
    from vigil.config import Settings
    from vigil.setup import build_options

    options = build_options(Settings())
    registry = MonitorRegistry(options)
"""

import logging

from vigil.config import Settings
from vigil.notify.channels import EmailChannel, NotificationChannel, WebhookChannel
from vigil.notify.routing import RoutedChannel
from vigil.options import MonitorOptions
from vigil.persistence.base import PersistenceLayer
from vigil.persistence.memory import InMemoryPersistence
from vigil.persistence.redis_store import RedisPersistence

logger = logging.getLogger(__name__)


def build_persistence(settings: Settings) -> PersistenceLayer:
    """Redis store when a URL is configured, in-memory store otherwise."""
    if settings.redis_url:
        from redis.asyncio import Redis

        redis = Redis.from_url(settings.redis_url)
        logger.info("Redis persistence configured")
        return RedisPersistence(redis=redis, prefix=settings.key_prefix)

    logger.warning("No redis_url configured, monitor state will not survive restarts")
    return InMemoryPersistence()


def build_channel(settings: Settings) -> NotificationChannel:
    """Webhook channel always, email channel when SMTP is configured."""
    channels: dict[str, NotificationChannel] = {}

    if settings.smtp_host:
        channels["email"] = EmailChannel(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            sender=settings.smtp_sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )
        logger.info("Email channel configured")

    channels["webhook"] = WebhookChannel(timeout_seconds=settings.webhook_timeout_seconds)
    logger.info("Webhook channel configured")

    return RoutedChannel(channels)


def build_options(settings: Settings) -> MonitorOptions:
    return MonitorOptions.from_settings(
        settings,
        persistence=build_persistence(settings),
        channel=build_channel(settings),
    )
