"""Shared fixtures for monitor tests."""

from unittest.mock import AsyncMock

import pytest
from vigil.monitors.levels import DEFAULT_LEVEL
from vigil.notify.channels import DeliveryResult
from vigil.options import MonitorOptions
from vigil.persistence.memory import InMemoryPersistence


@pytest.fixture
def persistence():
    """Fresh in-memory store."""
    return InMemoryPersistence()


@pytest.fixture
def channel():
    """Notification channel mock that always delivers."""
    mock = AsyncMock()
    mock.deliver = AsyncMock(return_value=DeliveryResult(success=True))
    return mock


@pytest.fixture
def options(persistence, channel):
    """Options with recipients for the default and critical levels."""
    opts = MonitorOptions(persistence=persistence, channel=channel)
    opts.set_recipient(DEFAULT_LEVEL, "team@example.com")
    opts.set_recipient("critical", "oncall@example.com")
    return opts
