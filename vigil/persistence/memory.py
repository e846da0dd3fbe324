"""In-process persistence layer.

Used when no Redis URL is configured and in tests. State lives for the
lifetime of the process only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vigil.persistence.base import PersistenceLayer

if TYPE_CHECKING:
    from vigil.monitors.outcome import Outcome
    from vigil.monitors.settings import MonitorSettings


class InMemoryPersistence(PersistenceLayer):
    """Dictionary backed PersistenceLayer."""

    def __init__(self) -> None:
        self._values: dict[tuple[str, str | None], str] = {}
        self._disabled: set[tuple[str, str | None]] = set()
        self._outcomes: dict[tuple[str, str | None], Outcome] = {}
        self._settings: dict[str, MonitorSettings] = {}

    async def read(self, key: str, environment: str | None = None) -> str | None:
        return self._values.get((key, environment))

    async def write(self, key: str, value: str | int, environment: str | None = None) -> None:
        self._values[(key, environment)] = str(value)

    async def delete(self, key: str, environment: str | None = None) -> None:
        self._values.pop((key, environment), None)

    async def disable(self, name: str, environment: str | None = None) -> None:
        self._disabled.add((name, environment))

    async def enable(self, name: str, environment: str | None = None) -> None:
        self._disabled.discard((name, environment))

    async def is_disabled(self, name: str, environment: str | None = None) -> bool:
        return (name, environment) in self._disabled

    async def write_outcome(
        self, name: str, outcome: Outcome, environment: str | None = None
    ) -> None:
        self._outcomes[(name, environment)] = outcome

    async def read_outcome(self, name: str, environment: str | None = None) -> Outcome | None:
        return self._outcomes.get((name, environment))

    async def save_settings(self, settings: MonitorSettings) -> None:
        self._settings[settings.name] = settings

    async def read_settings(self, name: str) -> MonitorSettings | None:
        return self._settings.get(name)
