"""Redis persistence layer for monitor state.

Stores failure counters, disable flags, latest outcomes and settings
snapshots. Outcomes and settings are JSON; counters are plain strings.

Example:
    >>> from redis.asyncio import Redis
    >>> redis = Redis.from_url("redis://localhost:6379/0")
    >>> store = RedisPersistence(redis=redis)
    >>> await store.write("homepage_failures", 3, "production")
    >>> await store.read("homepage_failures", "production")
    '3'
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from vigil.monitors.outcome import Outcome
from vigil.monitors.settings import MonitorSettings
from vigil.persistence.base import PersistenceLayer
from vigil.persistence.keys import MonitorKeys

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def _decode(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8")
    return data


class RedisPersistence(PersistenceLayer):
    """Redis-backed PersistenceLayer.

    No TTLs are applied: counters and flags persist until overwritten or
    deleted.

    Args:
        redis: Async Redis client instance
        prefix: Namespace for every key (default: 'vigil')
    """

    def __init__(self, redis: Redis, prefix: str = MonitorKeys.DEFAULT_PREFIX) -> None:
        self.redis = redis
        self.keys = MonitorKeys(prefix)

    async def read(self, key: str, environment: str | None = None) -> str | None:
        data = await self.redis.get(self.keys.value(key, environment))
        if data is None:
            return None
        return _decode(data)

    async def write(self, key: str, value: str | int, environment: str | None = None) -> None:
        await self.redis.set(self.keys.value(key, environment), str(value))

    async def delete(self, key: str, environment: str | None = None) -> None:
        await self.redis.delete(self.keys.value(key, environment))

    async def disable(self, name: str, environment: str | None = None) -> None:
        await self.redis.set(self.keys.disabled(name, environment), "1")

    async def enable(self, name: str, environment: str | None = None) -> None:
        await self.redis.delete(self.keys.disabled(name, environment))

    async def is_disabled(self, name: str, environment: str | None = None) -> bool:
        return bool(await self.redis.exists(self.keys.disabled(name, environment)))

    async def write_outcome(
        self, name: str, outcome: Outcome, environment: str | None = None
    ) -> None:
        await self.redis.set(self.keys.outcome(name, environment), outcome.to_json())

    async def read_outcome(self, name: str, environment: str | None = None) -> Outcome | None:
        """Return the stored outcome, None if missing or unreadable."""
        cache_key = self.keys.outcome(name, environment)
        data = await self.redis.get(cache_key)
        if data is None:
            return None

        try:
            return Outcome.from_json(_decode(data))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Invalid outcome JSON in key %s", cache_key)
            return None

    async def save_settings(self, settings: MonitorSettings) -> None:
        await self.redis.set(self.keys.settings(settings.name), settings.model_dump_json())

    async def read_settings(self, name: str) -> MonitorSettings | None:
        cache_key = self.keys.settings(name)
        data = await self.redis.get(cache_key)
        if data is None:
            return None

        try:
            return MonitorSettings.model_validate_json(_decode(data))
        except ValidationError as e:
            logger.warning("Validation error for settings key %s: %s", cache_key, e)
            return None

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self.redis.aclose()
