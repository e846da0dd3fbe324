"""Notification channels and recipient routing."""

from vigil.notify.channels import (
    DeliveryResult,
    EmailChannel,
    NotificationChannel,
    WebhookChannel,
)
from vigil.notify.routing import RoutedChannel, channel_type_for

__all__ = [
    "DeliveryResult",
    "EmailChannel",
    "NotificationChannel",
    "RoutedChannel",
    "WebhookChannel",
    "channel_type_for",
]
