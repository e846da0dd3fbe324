"""Consecutive-failure counter for a monitor.

Counter protocol per (monitor, environment):
- Success: counter reset to 0
- Failure: counter read (missing, malformed or unreadable -> 0), incremented, written
- Disabled: counter neither read nor written
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vigil.monitors.errors import PersistenceReadAnomaly

if TYPE_CHECKING:
    from vigil.monitors.outcome import Outcome
    from vigil.persistence.base import PersistenceLayer

logger = logging.getLogger(__name__)


def parse_count(key: str, value: str | bytes | None) -> int:
    """Parse a stored counter value.

    Args:
        key: Counter key (for error reporting)
        value: Raw stored value, None when unset

    Returns:
        The count, 0 when unset

    Raises:
        PersistenceReadAnomaly: If the value is not a non-negative integer
    """
    if value is None:
        return 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")

    try:
        count = int(str(value).strip())
    except ValueError:
        raise PersistenceReadAnomaly(key, value) from None

    if count < 0:
        raise PersistenceReadAnomaly(key, value)
    return count


class FailureTracker:
    """Maintains the consecutive-failure counter in the persistence layer."""

    def __init__(self, persistence: PersistenceLayer, key: str) -> None:
        """Initialize tracker.

        Args:
            persistence: Store holding the counter
            key: Counter key, scoped by environment in the store
        """
        self._persistence = persistence
        self.key = key

    async def failure_count(self, environment: str | None = None) -> int:
        """Read the current count, treating unreadable values as 0."""
        try:
            value = await self._persistence.read(self.key, environment)
        except Exception as e:
            logger.warning(
                "Error reading counter %s (environment=%s), treating as 0: %s",
                self.key,
                environment,
                e,
            )
            return 0

        try:
            return parse_count(self.key, value)
        except PersistenceReadAnomaly as e:
            logger.warning("%s (environment=%s), treating as 0", e, environment)
            return 0

    async def record_outcome(self, outcome: Outcome, environment: str | None = None) -> int | None:
        """Apply an outcome to the counter.

        A failed write is logged; the returned count is still the one this
        run computed.

        Args:
            outcome: Outcome of the run
            environment: Active environment

        Returns:
            0 on success, the new count on failure, None when disabled
        """
        if outcome.is_disabled:
            return None

        if outcome.is_success:
            count = 0
        else:
            count = await self.failure_count(environment) + 1

        try:
            await self._persistence.write(self.key, count, environment)
        except Exception as e:
            logger.warning(
                "Error writing counter %s (environment=%s): %s", self.key, environment, e
            )
        return count
