"""Engine options shared by every monitor.

MonitorOptions is built once by the process entry point and passed to each
Monitor; nothing in the package keeps a module-level instance.

Usage:
    options = MonitorOptions(persistence=InMemoryPersistence(), channel=channel)
    options.set_recipient("critical", "oncall@example.com")
    options.set_recipient(DEFAULT_LEVEL, "team@example.com")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vigil.monitors.errors import ConfigurationError
from vigil.monitors.levels import DEFAULT_LEVEL, LevelEntry

if TYPE_CHECKING:
    from vigil.config import Settings
    from vigil.notify.channels import NotificationChannel
    from vigil.persistence.base import PersistenceLayer


@dataclass
class MonitorOptions:
    """Defaults and collaborators for monitors.

    Attributes:
        persistence: Store for counters, flags and outcomes
        channel: Notification transport, None disables delivery
        notify_after: Default failures before the first notification
        then_notify_every: Default cadence of repeat notifications
        levels: Level entries every monitor starts from
        recipients: Maps a level name to its recipient
    """

    persistence: PersistenceLayer
    channel: NotificationChannel | None = None
    notify_after: int = 1
    then_notify_every: int = 1
    levels: list[LevelEntry] = field(default_factory=lambda: [LevelEntry(DEFAULT_LEVEL)])
    recipients: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate default thresholds."""
        for attr in ("notify_after", "then_notify_every"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{attr} must be a positive integer, got {value!r}")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        persistence: PersistenceLayer,
        channel: NotificationChannel | None = None,
    ) -> MonitorOptions:
        return cls(
            persistence=persistence,
            channel=channel,
            notify_after=settings.notify_after,
            then_notify_every=settings.then_notify_every,
            recipients=dict(settings.recipients),
        )

    def set_recipient(self, level: str, recipient: str) -> None:
        """Route notifications for ``level`` to ``recipient``."""
        self.recipients[level] = recipient

    def recipient(self, level: str) -> str | None:
        """Return the recipient for a level, None when nobody is configured."""
        return self.recipients.get(level)
