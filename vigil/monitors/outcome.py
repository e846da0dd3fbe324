"""Outcome value type for a single monitor run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class OutcomeStatus(str, Enum):
    """Result of one monitor run."""

    SUCCESS = "success"
    FAILURE = "failure"
    DISABLED = "disabled"  # Assertion was not evaluated


@dataclass(frozen=True)
class Outcome:
    """Immutable result of a monitor run.

    Attributes:
        status: Success, failure or disabled
        diagnostic: Error text captured when the assertion raised
        recorded_at: When the outcome was built (UTC)
    """

    status: OutcomeStatus
    diagnostic: str | None = None
    recorded_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @classmethod
    def success(cls) -> Outcome:
        return cls(status=OutcomeStatus.SUCCESS)

    @classmethod
    def failure(cls, diagnostic: str | None = None) -> Outcome:
        return cls(status=OutcomeStatus.FAILURE, diagnostic=diagnostic)

    @classmethod
    def disabled(cls) -> Outcome:
        return cls(status=OutcomeStatus.DISABLED)

    @classmethod
    def from_result(cls, result: bool, diagnostic: str | None = None) -> Outcome:
        """Map an assertion result onto success or failure."""
        if result:
            return cls.success()
        return cls.failure(diagnostic)

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILURE

    @property
    def is_disabled(self) -> bool:
        return self.status == OutcomeStatus.DISABLED

    def to_json(self) -> str:
        """Serialize to JSON."""
        data = {
            "status": self.status.value,
            "diagnostic": self.diagnostic,
            "recorded_at": self.recorded_at.isoformat(),
        }
        return json.dumps(data)

    @classmethod
    def from_json(cls, json_str: str | bytes) -> Outcome:
        """Deserialize from JSON."""
        data = json.loads(json_str)
        return cls(
            status=OutcomeStatus(data["status"]),
            diagnostic=data.get("diagnostic"),
            recorded_at=datetime.fromisoformat(data["recorded_at"]),
        )
