"""Tests for building engine collaborators from settings."""

from vigil.config import Settings
from vigil.notify.channels import EmailChannel, WebhookChannel
from vigil.notify.routing import RoutedChannel
from vigil.persistence.memory import InMemoryPersistence
from vigil.persistence.redis_store import RedisPersistence
from vigil.setup import build_channel, build_options, build_persistence


class TestBuildPersistence:
    """Tests for build_persistence."""

    def test_in_memory_without_redis_url(self):
        assert isinstance(build_persistence(Settings(redis_url=None)), InMemoryPersistence)

    def test_redis_with_url(self):
        store = build_persistence(Settings(redis_url="redis://localhost:6379/0", key_prefix="ops"))

        assert isinstance(store, RedisPersistence)
        assert store.keys.prefix == "ops"


class TestBuildChannel:
    """Tests for build_channel."""

    def test_webhook_only_without_smtp(self):
        channel = build_channel(Settings(smtp_host=None, webhook_timeout_seconds=5.0))

        assert isinstance(channel, RoutedChannel)
        assert set(channel.channels) == {"webhook"}
        assert isinstance(channel.channels["webhook"], WebhookChannel)
        assert channel.channels["webhook"].timeout_seconds == 5.0

    def test_email_with_smtp(self):
        channel = build_channel(
            Settings(
                smtp_host="smtp.example.com",
                smtp_port=2525,
                smtp_sender="alerts@example.com",
                smtp_use_tls=False,
            )
        )

        email = channel.channels["email"]
        assert isinstance(email, EmailChannel)
        assert email.smtp_host == "smtp.example.com"
        assert email.smtp_port == 2525
        assert email.sender == "alerts@example.com"
        assert email.use_tls is False


class TestBuildOptions:
    """Tests for build_options."""

    def test_build_options(self):
        options = build_options(
            Settings(redis_url=None, notify_after=2, recipients={"default": "team@example.com"})
        )

        assert isinstance(options.persistence, InMemoryPersistence)
        assert isinstance(options.channel, RoutedChannel)
        assert options.notify_after == 2
        assert options.recipient("default") == "team@example.com"
