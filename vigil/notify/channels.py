"""Notification channel implementations.

This module provides:
- DeliveryResult: Result dataclass for notification delivery
- NotificationChannel: Abstract base class for notification channels
- EmailChannel: SMTP-based email notification channel
- WebhookChannel: HTTP webhook notification channel (Slack-compatible)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage

import aiosmtplib
import httpx


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt.

    Attributes:
        success: Whether the delivery succeeded
        response_code: HTTP status code or SMTP response code (if applicable)
        error_message: Error message if delivery failed
    """

    success: bool
    response_code: int | None = None
    error_message: str | None = None


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Channels report transport errors through DeliveryResult instead of
    raising.
    """

    @abstractmethod
    async def deliver(self, recipient: str, subject: str, body: str) -> DeliveryResult:
        """Deliver a notification.

        Args:
            recipient: Channel-specific destination (email address, webhook URL, etc.)
            subject: One-line summary
            body: Full message text

        Returns:
            DeliveryResult indicating success or failure
        """
        pass


class EmailChannel(NotificationChannel):
    """SMTP-based email notification channel."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
    ):
        """Initialize the email channel.

        Args:
            smtp_host: SMTP server hostname
            smtp_port: SMTP server port
            sender: Sender email address
            username: SMTP authentication username (optional)
            password: SMTP authentication password (optional)
            use_tls: Whether to use STARTTLS (default: True)
        """
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls

    async def deliver(self, recipient: str, subject: str, body: str) -> DeliveryResult:
        """Send an email.

        Returns:
            DeliveryResult with success=True and response_code=250 on success,
            or success=False with error_message on failure
        """
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = recipient
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message=message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.username,
                password=self.password,
                start_tls=self.use_tls,
            )
            return DeliveryResult(success=True, response_code=250)
        except aiosmtplib.SMTPException as e:
            return DeliveryResult(success=False, error_message=str(e))


class WebhookChannel(NotificationChannel):
    """HTTP webhook notification channel.

    Sends Slack-compatible JSON payloads via POST request.
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the webhook channel.

        Args:
            timeout_seconds: HTTP request timeout (default: 10.0 seconds)
            transport: Optional httpx transport (used by tests)
        """
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def deliver(self, recipient: str, subject: str, body: str) -> DeliveryResult:
        """POST the notification to the webhook URL in ``recipient``."""
        payload = {
            "text": f":rotating_light: {subject}",
            "attachments": [
                {
                    "color": "#ff0000",
                    "text": body,
                }
            ],
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(recipient, json=payload)
                response.raise_for_status()
                return DeliveryResult(success=True, response_code=response.status_code)
        except httpx.TimeoutException:
            return DeliveryResult(
                success=False,
                error_message="Request timed out",
            )
        except httpx.HTTPStatusError as e:
            return DeliveryResult(
                success=False,
                response_code=e.response.status_code,
                error_message=str(e),
            )
        except httpx.RequestError as e:
            return DeliveryResult(
                success=False,
                error_message=str(e),
            )
