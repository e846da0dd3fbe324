"""Monitor registry and sweep runner.

The registry is owned by the entry point (CLI, API app) and holds the
monitors of one process. A sweep runs every selected monitor once per
environment, one at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vigil.monitors.errors import ConfigurationError

if TYPE_CHECKING:
    from vigil.monitors.monitor import Monitor
    from vigil.monitors.outcome import Outcome
    from vigil.options import MonitorOptions

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of running one monitor in one environment.

    Attributes:
        monitor: Name of the monitor
        environment: Environment of the run, None if not scoped
        outcome: Outcome, None if the run raised
        error: Error text if the run raised
    """

    monitor: str
    environment: str | None
    outcome: Outcome | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MonitorRegistry:
    """Holds the monitors of a process and runs them."""

    def __init__(self, options: MonitorOptions) -> None:
        self.options = options
        self._monitors: dict[str, Monitor] = {}

    def __len__(self) -> int:
        return len(self._monitors)

    def __iter__(self) -> Iterator[Monitor]:
        return iter(self._monitors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._monitors

    @property
    def names(self) -> list[str]:
        return list(self._monitors)

    async def register(self, monitor: Monitor) -> Monitor:
        """Add a monitor and save its settings.

        Raises:
            ConfigurationError: If a monitor with the same name is registered
        """
        if monitor.name in self._monitors:
            raise ConfigurationError(
                f"Monitor {monitor.name} is already registered", monitor_name=monitor.name
            )

        self._monitors[monitor.name] = monitor
        await self.options.persistence.save_settings(monitor.settings())
        logger.info("Registered monitor %s", monitor.name)
        return monitor

    async def register_all(self, monitors: Iterable[Monitor]) -> None:
        for monitor in monitors:
            await self.register(monitor)

    def get(self, name: str) -> Monitor:
        """Return a registered monitor.

        Raises:
            ConfigurationError: If no monitor has that name
        """
        try:
            return self._monitors[name]
        except KeyError:
            raise ConfigurationError(f"Unknown monitor: {name}", monitor_name=name) from None

    def environments_for(
        self, monitor: Monitor, environment: str | None = None
    ) -> list[str | None]:
        """Environments a sweep runs ``monitor`` in.

        Monitors without environments run once with None. Otherwise each
        listed environment, or only ``environment`` when given.
        """
        if not monitor.environments:
            return [None]
        if environment is None:
            return list(monitor.environments)
        if environment in monitor.environments:
            return [environment]
        return []

    async def run(
        self,
        environment: str | None = None,
        names: Iterable[str] | None = None,
    ) -> list[RunResult]:
        """Run the selected monitors once.

        Args:
            environment: Restrict scoped monitors to this environment
            names: Restrict to these monitor names (all when None)

        Returns:
            One RunResult per (monitor, environment) run

        Raises:
            ConfigurationError: If a name is unknown or a monitor is misconfigured
        """
        if names is None:
            monitors = list(self)
        else:
            monitors = [self.get(name) for name in names]

        results: list[RunResult] = []
        for monitor in monitors:
            for env in self.environments_for(monitor, environment):
                try:
                    outcome = await monitor.run(env)
                except ConfigurationError:
                    raise
                except Exception as e:
                    logger.exception("Monitor %s failed to run (environment=%s)", monitor.name, env)
                    results.append(RunResult(monitor.name, env, None, error=str(e)))
                    continue

                logger.info(
                    "Monitor %s (environment=%s): %s", monitor.name, env, outcome.status.value
                )
                results.append(RunResult(monitor.name, env, outcome))

        return results
