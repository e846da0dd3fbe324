"""Criticality level resolution.

A monitor carries an ordered list of level entries. An entry without an
environment is the monitor's default level; entries with an environment
apply to that environment only. The resolved level picks the notification
recipient.

Resolution rules:
1. A single entry without environment applies to every environment
2. Otherwise only entries whose environment equals the active one match
3. No match falls back to DEFAULT_LEVEL
4. Several matches: the first registered one wins
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_LEVEL = "default"


@dataclass(frozen=True)
class LevelEntry:
    """A criticality level, optionally scoped to one environment."""

    level: str
    environment: str | None = None


class LevelResolver:
    """Holds a monitor's level entries and resolves the effective level."""

    def __init__(self, entries: Iterable[LevelEntry] | None = None) -> None:
        """Initialize from seed entries (usually the options' default levels).

        Args:
            entries: Initial entries, copied so the seed is never mutated
        """
        if entries is None:
            entries = [LevelEntry(DEFAULT_LEVEL)]
        self._entries: list[LevelEntry] = list(entries)

    @property
    def entries(self) -> list[LevelEntry]:
        return list(self._entries)

    def set_level(self, level: str, environment: str | None = None) -> None:
        """Register a level, replacing any earlier entry with the same name.

        A level without environment becomes the new default and drops the
        system DEFAULT_LEVEL entry.

        Args:
            level: Level name (e.g. "critical")
            environment: Environment the level applies to, None for all
        """
        self._entries = [e for e in self._entries if e.level != level]
        self._entries.append(LevelEntry(level, environment))

        if environment is None:
            self._entries = [e for e in self._entries if e.level != DEFAULT_LEVEL]

    def resolve(self, environment: str | None) -> str:
        """Return the effective level for an environment.

        Args:
            environment: Active environment, None when environment-agnostic

        Returns:
            Level name, DEFAULT_LEVEL when nothing matches
        """
        if len(self._entries) == 1 and self._entries[0].environment is None:
            return self._entries[0].level

        matches = [
            e for e in self._entries
            if e.environment is not None and e.environment == environment
        ]
        if not matches:
            return DEFAULT_LEVEL

        return matches[0].level
