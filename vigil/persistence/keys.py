"""
Redis key schema for monitor state.

Key naming convention:
- Use colons (:) as namespace separators
- Environment-agnostic values use "_" in the environment slot

Key patterns:
- {prefix}:{env}:value:{key}      - Raw values such as failure counters (string)
- {prefix}:{env}:disabled:{name}  - Disable flag (present = disabled)
- {prefix}:{env}:outcome:{name}   - Latest outcome (JSON)
- {prefix}:settings:{name}        - Monitor settings snapshot (JSON)
"""

NO_ENVIRONMENT = "_"


class MonitorKeys:
    """Redis key patterns for monitor state."""

    DEFAULT_PREFIX = "vigil"

    VALUE = "value"
    DISABLED = "disabled"
    OUTCOME = "outcome"
    SETTINGS = "settings"

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix

    def _scoped(self, kind: str, name: str, environment: str | None) -> str:
        env = environment if environment else NO_ENVIRONMENT
        return f"{self.prefix}:{env}:{kind}:{name}"

    def value(self, key: str, environment: str | None = None) -> str:
        """Key for a raw value (e.g. 'vigil:production:value:homepage_failures')."""
        return self._scoped(self.VALUE, key, environment)

    def disabled(self, name: str, environment: str | None = None) -> str:
        return self._scoped(self.DISABLED, name, environment)

    def outcome(self, name: str, environment: str | None = None) -> str:
        return self._scoped(self.OUTCOME, name, environment)

    def settings(self, name: str) -> str:
        """Settings are not environment scoped (e.g. 'vigil:settings:homepage')."""
        return f"{self.prefix}:{self.SETTINGS}:{name}"
