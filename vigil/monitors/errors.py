# vigil/monitors/errors.py
"""Monitor error types.

ConfigurationError and its subclasses are fatal: they describe a defect in a
monitor definition and propagate to the caller. The other types are handled
inside the engine and only show up in logs and notification bodies.
"""


class MonitorError(Exception):
    """Base exception for monitor errors."""
    pass


class ConfigurationError(MonitorError):
    """Monitor definition is invalid (missing field, bad threshold, duplicate name)."""

    def __init__(self, message: str, monitor_name: str = None):
        super().__init__(message)
        self.monitor_name = monitor_name


class AssertionResultError(ConfigurationError, TypeError):
    """Assertion returned something other than a bool."""

    def __init__(self, monitor_name: str, result: object):
        super().__init__(
            f"Assertions must return a boolean value. Monitor {monitor_name} "
            f"returned {result!r} ({type(result).__name__}).",
            monitor_name=monitor_name,
        )
        self.result = result


class AssertionRuntimeError(MonitorError):
    """Assertion raised while being evaluated.

    Never propagated out of a run; the engine turns it into a Failure outcome
    and uses ``diagnostic`` in the notification body.
    """

    def __init__(self, monitor_name: str, cause: BaseException, traceback_text: str = ""):
        super().__init__(f"Uncaught exception running {monitor_name}: {cause}")
        self.monitor_name = monitor_name
        self.cause = cause
        self.traceback_text = traceback_text

    @property
    def diagnostic(self) -> str:
        text = str(self)
        if self.traceback_text:
            text = f"{text}. Backtrace: {self.traceback_text}"
        return text


class PersistenceReadAnomaly(MonitorError):
    """Stored counter value could not be parsed."""

    def __init__(self, key: str, value: object):
        super().__init__(f"Malformed counter value for {key}: {value!r}")
        self.key = key
        self.value = value


class DeliveryFailure(MonitorError):
    """Notification could not be delivered to a recipient."""

    def __init__(self, message: str, recipient: str = None):
        super().__init__(message)
        self.recipient = recipient
