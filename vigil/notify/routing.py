"""Recipient routing.

Routing logic:
1. A recipient starting with http:// or https:// goes to the webhook channel
2. Anything else is treated as an email address
3. A recipient whose channel type is not configured fails with DeliveryFailure
"""

import logging

from vigil.monitors.errors import DeliveryFailure
from vigil.notify.channels import DeliveryResult, NotificationChannel

logger = logging.getLogger(__name__)

WEBHOOK_SCHEMES = ("http://", "https://")


def channel_type_for(recipient: str) -> str:
    """Return the channel type ("webhook" or "email") for a recipient."""
    if recipient.lower().startswith(WEBHOOK_SCHEMES):
        return "webhook"
    return "email"


class RoutedChannel(NotificationChannel):
    """Dispatches each delivery to the channel matching the recipient form.

    Example:
        channel = RoutedChannel({"email": email_channel, "webhook": WebhookChannel()})
        await channel.deliver("ops@example.com", subject, body)      # email
        await channel.deliver("https://hooks.slack.com/...", subject, body)  # webhook
    """

    def __init__(self, channels: dict[str, NotificationChannel]):
        """Initialize with channels keyed by type ("email", "webhook")."""
        self.channels = channels

    async def deliver(self, recipient: str, subject: str, body: str) -> DeliveryResult:
        """Deliver through the matching channel.

        Raises:
            DeliveryFailure: If no channel is configured for the recipient
        """
        channel_type = channel_type_for(recipient)
        channel = self.channels.get(channel_type)
        if channel is None:
            raise DeliveryFailure(
                f"No {channel_type} channel configured for recipient {recipient}",
                recipient=recipient,
            )

        logger.debug("Routing notification to %s channel", channel_type)
        return await channel.deliver(recipient, subject, body)
