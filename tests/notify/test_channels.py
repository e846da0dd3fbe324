"""Tests for notification channels."""

import json
from unittest.mock import AsyncMock, patch

import aiosmtplib
import httpx
import pytest
from vigil.notify.channels import (
    DeliveryResult,
    EmailChannel,
    NotificationChannel,
    WebhookChannel,
)

# Test fixtures for SMTP authentication (not real credentials)
TEST_SMTP_USER = "user"
TEST_SMTP_CRED = "test-cred-1234"


class TestDeliveryResult:
    """Tests for DeliveryResult dataclass."""

    def test_delivery_result_success_only(self):
        result = DeliveryResult(success=True)
        assert result.success is True
        assert result.response_code is None
        assert result.error_message is None

    def test_delivery_result_all_fields(self):
        result = DeliveryResult(success=False, response_code=500, error_message="boom")
        assert result.success is False
        assert result.response_code == 500
        assert result.error_message == "boom"


class TestNotificationChannel:
    """Tests for NotificationChannel abstract base class."""

    def test_notification_channel_is_abstract(self):
        with pytest.raises(TypeError):
            NotificationChannel()

    def test_subclasses_must_implement_deliver(self):
        class IncompleteChannel(NotificationChannel):
            pass

        with pytest.raises(TypeError):
            IncompleteChannel()


class TestEmailChannel:
    """Tests for EmailChannel."""

    def _channel(self) -> EmailChannel:
        return EmailChannel(
            smtp_host="smtp.example.com",
            smtp_port=587,
            sender="monitors@example.com",
            username=TEST_SMTP_USER,
            password=TEST_SMTP_CRED,
        )

    def test_email_channel_default_tls(self):
        channel = EmailChannel(smtp_host="smtp.example.com", smtp_port=587, sender="a@b.c")
        assert channel.use_tls is True
        assert channel.username is None

    @pytest.mark.asyncio
    async def test_deliver_sends_message(self):
        channel = self._channel()

        with patch("vigil.notify.channels.aiosmtplib.send", new_callable=AsyncMock) as mock_send:
            result = await channel.deliver(
                "oncall@example.com",
                "[PROD] Monitor failure: homepage",
                "Monitor failure: homepage. Failure count: 3",
            )

        assert result == DeliveryResult(success=True, response_code=250)
        kwargs = mock_send.call_args.kwargs
        message = kwargs["message"]
        assert message["To"] == "oncall@example.com"
        assert message["From"] == "monitors@example.com"
        assert message["Subject"] == "[PROD] Monitor failure: homepage"
        assert "Failure count: 3" in message.get_content()
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 587
        assert kwargs["username"] == TEST_SMTP_USER
        assert kwargs["password"] == TEST_SMTP_CRED
        assert kwargs["start_tls"] is True

    @pytest.mark.asyncio
    async def test_deliver_smtp_error_returns_failure(self):
        channel = self._channel()

        with patch(
            "vigil.notify.channels.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=aiosmtplib.SMTPException("Connection refused"),
        ):
            result = await channel.deliver("oncall@example.com", "s", "b")

        assert result.success is False
        assert "Connection refused" in result.error_message


class TestWebhookChannel:
    """Tests for WebhookChannel."""

    def test_default_timeout(self):
        assert WebhookChannel().timeout_seconds == 10.0

    @pytest.mark.asyncio
    async def test_deliver_posts_payload(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        channel = WebhookChannel(transport=httpx.MockTransport(handler))

        result = await channel.deliver(
            "https://hooks.example.com/T000", "Monitor failure: homepage", "body text"
        )

        assert result.success is True
        assert result.response_code == 200
        assert str(requests[0].url) == "https://hooks.example.com/T000"
        payload = json.loads(requests[0].content)
        assert "Monitor failure: homepage" in payload["text"]
        assert payload["attachments"][0]["text"] == "body text"

    @pytest.mark.asyncio
    async def test_deliver_http_error(self):
        channel = WebhookChannel(transport=httpx.MockTransport(lambda r: httpx.Response(500)))

        result = await channel.deliver("https://hooks.example.com/T000", "s", "b")

        assert result.success is False
        assert result.response_code == 500

    @pytest.mark.asyncio
    async def test_deliver_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        channel = WebhookChannel(transport=httpx.MockTransport(handler))

        result = await channel.deliver("https://hooks.example.com/T000", "s", "b")

        assert result.success is False
        assert result.error_message == "Request timed out"

    @pytest.mark.asyncio
    async def test_deliver_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        channel = WebhookChannel(transport=httpx.MockTransport(handler))

        result = await channel.deliver("https://hooks.example.com/T000", "s", "b")

        assert result.success is False
        assert "connection refused" in result.error_message
