"""Monitor definition and run engine.

A Monitor wraps a boolean assertion. Each call to ``run`` goes through:

    disabled? -> assert -> outcome -> count failures -> escalate? -> hook -> persist

Usage:
    options = MonitorOptions(persistence=InMemoryPersistence(), channel=channel)
    options.set_recipient("critical", "oncall@example.com")

    monitor = Monitor(
        name="homepage",
        assertion=assert_online("https://example.com/"),
        options=options,
        notify_after=3,
        then_notify_every=10,
        environments=("production", "staging"),
        levels=[LevelEntry("critical", "production")],
    )
    outcome = await monitor.run("production")
"""

from __future__ import annotations

import inspect
import logging
import traceback
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Union

from vigil.monitors.errors import (
    AssertionResultError,
    AssertionRuntimeError,
    ConfigurationError,
    DeliveryFailure,
)
from vigil.monitors.escalation import should_notify
from vigil.monitors.levels import LevelEntry, LevelResolver
from vigil.monitors.outcome import Outcome
from vigil.monitors.settings import LevelSetting, MonitorSettings
from vigil.monitors.tracker import FailureTracker

if TYPE_CHECKING:
    from vigil.options import MonitorOptions

logger = logging.getLogger(__name__)

AssertionCallable = Callable[[], Union[bool, Awaitable[bool]]]
FailureHook = Callable[[int], Any]


def _positive_int(field: str, value: Any, monitor_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"{field} must be a positive integer for monitor {monitor_name}, got {value!r}",
            monitor_name=monitor_name,
        )
    return value


class Monitor:
    """A named check with an escalation policy.

    Thresholds fall back to the options' defaults when not given. Level
    entries start from ``options.levels`` and are then overridden by
    ``levels`` in order, as if ``set_level`` had been called for each.
    """

    def __init__(
        self,
        name: str,
        assertion: AssertionCallable,
        options: MonitorOptions,
        *,
        description: str | None = None,
        notify_after: int | None = None,
        then_notify_every: int | None = None,
        environments: Iterable[str] = (),
        levels: Iterable[LevelEntry | str] = (),
        if_failing: FailureHook | None = None,
    ) -> None:
        """Build and validate a monitor.

        Raises:
            ConfigurationError: If name or assertion is missing, thresholds are
                not positive integers, or if_failing is not callable
        """
        if isinstance(name, str):
            name = name.strip()
        if not name or not isinstance(name, str):
            raise ConfigurationError("name is required for all monitors.")
        if assertion is None or not callable(assertion):
            raise ConfigurationError("assert is required for all monitors.", monitor_name=name)
        if if_failing is not None and not callable(if_failing):
            raise ConfigurationError("if_failing must be callable", monitor_name=name)

        self.name = name
        self.description = description.strip() if description else description
        self.notify_after = _positive_int(
            "notify_after",
            options.notify_after if notify_after is None else notify_after,
            name,
        )
        self.then_notify_every = _positive_int(
            "then_notify_every",
            options.then_notify_every if then_notify_every is None else then_notify_every,
            name,
        )
        self.environments: tuple[str, ...] = tuple(environments)
        self.current_environment: str | None = None

        self._assertion = assertion
        self._if_failing = if_failing
        self._options = options
        self._levels = LevelResolver(options.levels)
        for entry in levels:
            if isinstance(entry, str):
                entry = LevelEntry(entry)
            self.set_level(entry.level, entry.environment)

        self._tracker = FailureTracker(options.persistence, self.failure_count_key)

    def __repr__(self) -> str:
        return f"Monitor(name={self.name!r}, environments={list(self.environments)!r})"

    @property
    def persistence_key(self) -> str:
        return self.name

    @property
    def failure_count_key(self) -> str:
        return f"{self.persistence_key}_failures"

    @property
    def persistence(self):
        return self._options.persistence

    @property
    def levels(self) -> list[LevelEntry]:
        return self._levels.entries

    def _env(self, environment: str | None) -> str | None:
        return self.current_environment if environment is None else environment

    async def run(self, environment: str | None = None) -> Outcome:
        """Run the monitor once.

        Store errors are logged and never raised: an unreadable disabled flag
        runs the monitor, an unreadable counter counts as 0.

        Args:
            environment: Environment to evaluate against, None if not scoped

        Returns:
            The Outcome of this run

        Raises:
            AssertionResultError: If the assertion returned a non-bool
        """
        self.current_environment = environment

        if await self._check_disabled(environment):
            logger.info("Monitor %s is disabled (environment=%s)", self.name, environment)
            outcome = Outcome.disabled()
        else:
            result, diagnostic = await self._evaluate()
            outcome = Outcome.from_result(result, diagnostic)
            failure_count = await self._tracker.record_outcome(outcome, environment)

            if outcome.is_failure:
                if should_notify(failure_count, self.notify_after, self.then_notify_every):
                    await self.notify(failure_count, diagnostic)
                await self._call_failure_hook(failure_count)

        await self._update_stats(outcome, environment)
        return outcome

    async def _check_disabled(self, environment: str | None) -> bool:
        try:
            return await self.persistence.is_disabled(self.name, environment)
        except Exception as e:
            logger.warning(
                "Error reading disabled flag for monitor %s (environment=%s), running anyway: %s",
                self.name,
                environment,
                e,
            )
            return False

    async def _evaluate(self) -> tuple[bool, str | None]:
        """Call the assertion.

        Returns:
            (result, diagnostic) where diagnostic is set if the assertion raised
        """
        try:
            result = self._assertion()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            error = AssertionRuntimeError(self.name, e, traceback.format_exc())
            logger.error("%s", error.diagnostic)
            return False, error.diagnostic

        if not isinstance(result, bool):
            raise AssertionResultError(self.name, result)

        return result, None

    async def _call_failure_hook(self, failure_count: int) -> None:
        if self._if_failing is None:
            return

        try:
            result = self._if_failing(failure_count)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("if_failing hook raised for monitor %s", self.name)

    async def _update_stats(self, outcome: Outcome, environment: str | None) -> None:
        try:
            await self.persistence.write_outcome(self.name, outcome, environment)
        except Exception:
            logger.exception(
                "Failed to record outcome for monitor %s (environment=%s)", self.name, environment
            )

    def format_notification(
        self,
        failure_count: int,
        diagnostic: str | None = None,
        environment: str | None = None,
    ) -> tuple[str, str]:
        """Build the notification subject and body.

        Returns:
            (subject, body)
        """
        environment = self._env(environment)

        subject = f"Monitor failure: {self.name}"
        if environment:
            subject = f"[{environment.upper()}] {subject}"

        body = f"Monitor failure: {self.name}. Failure count: {failure_count}"
        if diagnostic:
            body = f"{body}\n{diagnostic}"

        return subject, body

    async def notify(
        self,
        failure_count: int,
        diagnostic: str | None = None,
        environment: str | None = None,
    ) -> bool:
        """Notify the recipient for this monitor's level that it is failing.

        Missing recipients, a missing channel and delivery failures are logged
        and never raised.

        Returns:
            True if the notification was delivered
        """
        environment = self._env(environment)
        level = self.level(environment)
        recipient = self._options.recipient(level)
        if not recipient:
            logger.info("Not notifying because there is no recipient. Level = %s", level)
            return False

        channel = self._options.channel
        if channel is None:
            logger.info("Not notifying %s: no notification channel configured", recipient)
            return False

        subject, body = self.format_notification(failure_count, diagnostic, environment)

        try:
            result = await channel.deliver(recipient, subject, body)
        except Exception as e:
            logger.error(
                "%s", DeliveryFailure(f"Notification for {self.name} failed: {e}", recipient)
            )
            return False

        if not result.success:
            logger.error(
                "%s",
                DeliveryFailure(
                    f"Notification for {self.name} to {recipient} failed "
                    f"(code={result.response_code}): {result.error_message}",
                    recipient,
                ),
            )
            return False

        logger.info("Notified %s of failure of %s (count=%d)", recipient, self.name, failure_count)
        return True

    async def failure_count(self, environment: str | None = None) -> int:
        return await self._tracker.failure_count(self._env(environment))

    async def disable(self, environment: str | None = None) -> None:
        """Disable the monitor, for the active environment by default."""
        await self.persistence.disable(self.name, self._env(environment))

    async def enable(self, environment: str | None = None) -> None:
        """Re-enable the monitor, for the active environment by default."""
        await self.persistence.enable(self.name, self._env(environment))

    async def is_disabled(self, environment: str | None = None) -> bool:
        return await self.persistence.is_disabled(self.name, self._env(environment))

    def is_environment(self, tag: str) -> bool:
        """Return True if ``tag`` is the environment of the current run."""
        return self.current_environment == tag

    def level(self, environment: str | None = None) -> str:
        """Effective criticality level, for the active environment by default."""
        return self._levels.resolve(self._env(environment))

    def set_level(self, level: str, environment: str | None = None) -> None:
        """Set the criticality level, optionally for a single environment."""
        self._levels.set_level(level, environment)

    def settings(self) -> MonitorSettings:
        """Snapshot of this monitor's definition."""
        return MonitorSettings(
            name=self.name,
            description=self.description,
            notify_after=self.notify_after,
            then_notify_every=self.then_notify_every,
            environments=list(self.environments),
            levels=[
                LevelSetting(level=e.level, environment=e.environment) for e in self.levels
            ],
        )
