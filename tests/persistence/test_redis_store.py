"""Tests for the Redis persistence layer."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from vigil.monitors.outcome import Outcome, OutcomeStatus
from vigil.monitors.settings import LevelSetting, MonitorSettings
from vigil.persistence.keys import MonitorKeys
from vigil.persistence.redis_store import RedisPersistence


class TestMonitorKeys:
    """Tests for the Redis key schema."""

    def test_default_prefix(self):
        assert MonitorKeys.DEFAULT_PREFIX == "vigil"

    def test_value_key(self):
        keys = MonitorKeys()
        assert keys.value("homepage_failures", "production") == (
            "vigil:production:value:homepage_failures"
        )

    def test_environment_agnostic_slot(self):
        keys = MonitorKeys()
        assert keys.value("homepage_failures") == "vigil:_:value:homepage_failures"
        assert keys.disabled("homepage", None) == "vigil:_:disabled:homepage"

    def test_outcome_and_settings_keys(self):
        keys = MonitorKeys(prefix="ops")
        assert keys.outcome("homepage", "staging") == "ops:staging:outcome:homepage"
        assert keys.settings("homepage") == "ops:settings:homepage"


class TestRedisPersistence:
    """Tests for RedisPersistence against a mocked async client."""

    @pytest.fixture
    def mock_redis(self):
        """Create a mock async Redis client."""
        redis = AsyncMock()
        redis.get = AsyncMock(return_value=None)
        redis.set = AsyncMock()
        redis.delete = AsyncMock()
        redis.exists = AsyncMock(return_value=0)
        return redis

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        assert await store.read("homepage_failures", "prod") is None
        mock_redis.get.assert_called_once_with("vigil:prod:value:homepage_failures")

    @pytest.mark.asyncio
    async def test_read_decodes_bytes(self, mock_redis):
        mock_redis.get.return_value = b"3"
        store = RedisPersistence(redis=mock_redis)

        assert await store.read("homepage_failures", "prod") == "3"

    @pytest.mark.asyncio
    async def test_write_stores_string(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        await store.write("homepage_failures", 4, "prod")

        mock_redis.set.assert_called_once_with("vigil:prod:value:homepage_failures", "4")

    @pytest.mark.asyncio
    async def test_delete(self, mock_redis):
        store = RedisPersistence(redis=mock_redis, prefix="ops")

        await store.delete("homepage_failures")

        mock_redis.delete.assert_called_once_with("ops:_:value:homepage_failures")

    @pytest.mark.asyncio
    async def test_disable_sets_flag(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        await store.disable("homepage", "prod")

        mock_redis.set.assert_called_once_with("vigil:prod:disabled:homepage", "1")

    @pytest.mark.asyncio
    async def test_enable_deletes_flag(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        await store.enable("homepage", "prod")

        mock_redis.delete.assert_called_once_with("vigil:prod:disabled:homepage")

    @pytest.mark.asyncio
    async def test_is_disabled(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        assert await store.is_disabled("homepage", "prod") is False

        mock_redis.exists.return_value = 1
        assert await store.is_disabled("homepage", "prod") is True
        mock_redis.exists.assert_called_with("vigil:prod:disabled:homepage")

    @pytest.mark.asyncio
    async def test_write_outcome_serializes_json(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)
        outcome = Outcome(
            status=OutcomeStatus.FAILURE,
            diagnostic="boom",
            recorded_at=datetime(2026, 1, 25, 12, 0, 0, tzinfo=timezone.utc),
        )

        await store.write_outcome("homepage", outcome, "prod")

        key, data = mock_redis.set.call_args[0]
        assert key == "vigil:prod:outcome:homepage"
        assert json.loads(data)["status"] == "failure"

    @pytest.mark.asyncio
    async def test_read_outcome(self, mock_redis):
        outcome = Outcome.failure("boom")
        mock_redis.get.return_value = outcome.to_json().encode("utf-8")
        store = RedisPersistence(redis=mock_redis)

        assert await store.read_outcome("homepage", "prod") == outcome

    @pytest.mark.asyncio
    async def test_read_outcome_invalid_json_returns_none(self, mock_redis):
        mock_redis.get.return_value = b"not json"
        store = RedisPersistence(redis=mock_redis)

        assert await store.read_outcome("homepage", "prod") is None

    @pytest.mark.asyncio
    async def test_settings_round_trip(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)
        settings = MonitorSettings(
            name="homepage",
            notify_after=3,
            then_notify_every=2,
            environments=["prod"],
            levels=[LevelSetting(level="critical", environment="prod")],
        )

        await store.save_settings(settings)
        key, data = mock_redis.set.call_args[0]
        assert key == "vigil:settings:homepage"

        mock_redis.get.return_value = data.encode("utf-8")
        assert await store.read_settings("homepage") == settings

    @pytest.mark.asyncio
    async def test_read_settings_invalid_returns_none(self, mock_redis):
        mock_redis.get.return_value = b'{"name": ""}'
        store = RedisPersistence(redis=mock_redis)

        assert await store.read_settings("homepage") is None

    @pytest.mark.asyncio
    async def test_read_outcome_non_object_json_returns_none(self, mock_redis):
        mock_redis.get.return_value = b"[1]"
        store = RedisPersistence(redis=mock_redis)

        assert await store.read_outcome("homepage", "prod") is None

    @pytest.mark.asyncio
    async def test_close_closes_client(self, mock_redis):
        store = RedisPersistence(redis=mock_redis)

        await store.close()

        mock_redis.aclose.assert_awaited_once()
