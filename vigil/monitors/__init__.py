"""Monitor engine package.

This package provides:
- Outcome value type
- Level resolution per environment
- Consecutive-failure tracking
- Escalation policy
- Monitor run engine and the assert_online helper
"""

from vigil.monitors.assertions import assert_online
from vigil.monitors.errors import (
    AssertionResultError,
    AssertionRuntimeError,
    ConfigurationError,
    DeliveryFailure,
    MonitorError,
    PersistenceReadAnomaly,
)
from vigil.monitors.escalation import should_notify
from vigil.monitors.levels import DEFAULT_LEVEL, LevelEntry, LevelResolver
from vigil.monitors.monitor import Monitor
from vigil.monitors.outcome import Outcome, OutcomeStatus
from vigil.monitors.settings import LevelSetting, MonitorSettings
from vigil.monitors.tracker import FailureTracker

__all__ = [
    # Errors
    "AssertionResultError",
    "AssertionRuntimeError",
    "ConfigurationError",
    "DeliveryFailure",
    "MonitorError",
    "PersistenceReadAnomaly",
    # Levels
    "DEFAULT_LEVEL",
    "LevelEntry",
    "LevelResolver",
    # Outcome
    "Outcome",
    "OutcomeStatus",
    # Settings
    "LevelSetting",
    "MonitorSettings",
    # Engine
    "FailureTracker",
    "Monitor",
    "assert_online",
    "should_notify",
]
