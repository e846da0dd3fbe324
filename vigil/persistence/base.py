"""Persistence contract consumed by the monitor engine.

Values are plain strings scoped by (key, environment). ``environment`` may be
None for monitors that are not environment specific.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vigil.monitors.outcome import Outcome
    from vigil.monitors.settings import MonitorSettings


class PersistenceLayer(ABC):
    """Abstract key/value store for counters, disable flags and outcomes."""

    @abstractmethod
    async def read(self, key: str, environment: str | None = None) -> str | None:
        """Read a value, None if unset."""
        pass

    @abstractmethod
    async def write(self, key: str, value: str | int, environment: str | None = None) -> None:
        """Write a value (stored as a string)."""
        pass

    @abstractmethod
    async def delete(self, key: str, environment: str | None = None) -> None:
        pass

    @abstractmethod
    async def disable(self, name: str, environment: str | None = None) -> None:
        """Mark a monitor as disabled for an environment."""
        pass

    @abstractmethod
    async def enable(self, name: str, environment: str | None = None) -> None:
        """Clear the disabled flag for a monitor in an environment."""
        pass

    @abstractmethod
    async def is_disabled(self, name: str, environment: str | None = None) -> bool:
        """Return True if the monitor is disabled, False when the flag is absent."""
        pass

    @abstractmethod
    async def write_outcome(
        self, name: str, outcome: Outcome, environment: str | None = None
    ) -> None:
        """Store the latest outcome of a monitor for reporting."""
        pass

    @abstractmethod
    async def read_outcome(self, name: str, environment: str | None = None) -> Outcome | None:
        """Return the latest stored outcome, None if never run."""
        pass

    @abstractmethod
    async def save_settings(self, settings: MonitorSettings) -> None:
        """Store the settings snapshot of a monitor (called at registration)."""
        pass

    @abstractmethod
    async def read_settings(self, name: str) -> MonitorSettings | None:
        pass

    async def close(self) -> None:
        """Release connections held by the store. No-op by default."""
        pass
