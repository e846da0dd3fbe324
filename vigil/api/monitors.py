"""Monitor status and admin API endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from vigil.monitors.errors import ConfigurationError
from vigil.monitors.monitor import Monitor
from vigil.monitors.outcome import Outcome
from vigil.monitors.settings import LevelSetting
from vigil.runner import MonitorRegistry

router = APIRouter(prefix="/api/monitors", tags=["monitors"])


class OutcomeResponse(BaseModel):
    """Response for a single outcome."""

    status: str
    diagnostic: str | None
    recorded_at: datetime


class MonitorStatusResponse(BaseModel):
    """Response for a monitor's definition and state in one environment."""

    name: str
    description: str | None
    environment: str | None
    environments: list[str]
    notify_after: int
    then_notify_every: int
    level: str
    levels: list[LevelSetting]
    disabled: bool
    failure_count: int
    last_outcome: OutcomeResponse | None


def get_registry(request: Request) -> MonitorRegistry:
    """Registry attached to the app by create_app."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Monitor registry not initialized")
    return registry


def _get_monitor(registry: MonitorRegistry, name: str) -> Monitor:
    try:
        return registry.get(name)
    except ConfigurationError:
        raise HTTPException(status_code=404, detail=f"Monitor {name} not found") from None


def _outcome_response(outcome: Outcome | None) -> OutcomeResponse | None:
    if outcome is None:
        return None
    return OutcomeResponse(
        status=outcome.status.value,
        diagnostic=outcome.diagnostic,
        recorded_at=outcome.recorded_at,
    )


async def _status(monitor: Monitor, environment: str | None) -> MonitorStatusResponse:
    settings = monitor.settings()
    persistence = monitor.persistence
    return MonitorStatusResponse(
        name=settings.name,
        description=settings.description,
        environment=environment,
        environments=settings.environments,
        notify_after=settings.notify_after,
        then_notify_every=settings.then_notify_every,
        level=monitor.level(environment),
        levels=settings.levels,
        disabled=await persistence.is_disabled(monitor.name, environment),
        failure_count=await monitor.failure_count(environment),
        last_outcome=_outcome_response(await persistence.read_outcome(monitor.name, environment)),
    )


@router.get("", response_model=list[MonitorStatusResponse])
async def list_monitors(
    environment: str | None = None,
    registry: MonitorRegistry = Depends(get_registry),
) -> list[MonitorStatusResponse]:
    """List every registered monitor with its state in ``environment``."""
    return [await _status(monitor, environment) for monitor in registry]


@router.get("/{name}", response_model=MonitorStatusResponse)
async def get_monitor(
    name: str,
    environment: str | None = None,
    registry: MonitorRegistry = Depends(get_registry),
) -> MonitorStatusResponse:
    monitor = _get_monitor(registry, name)
    return await _status(monitor, environment)


@router.post("/{name}/disable", response_model=MonitorStatusResponse)
async def disable_monitor(
    name: str,
    environment: str | None = None,
    registry: MonitorRegistry = Depends(get_registry),
) -> MonitorStatusResponse:
    monitor = _get_monitor(registry, name)
    await monitor.persistence.disable(monitor.name, environment)
    return await _status(monitor, environment)


@router.post("/{name}/enable", response_model=MonitorStatusResponse)
async def enable_monitor(
    name: str,
    environment: str | None = None,
    registry: MonitorRegistry = Depends(get_registry),
) -> MonitorStatusResponse:
    monitor = _get_monitor(registry, name)
    await monitor.persistence.enable(monitor.name, environment)
    return await _status(monitor, environment)


@router.post("/{name}/run", response_model=OutcomeResponse)
async def run_monitor(
    name: str,
    environment: str | None = None,
    registry: MonitorRegistry = Depends(get_registry),
) -> OutcomeResponse:
    """Run a monitor once.

    Returns 400 if the environment is not one the monitor is scoped to.
    """
    monitor = _get_monitor(registry, name)
    if monitor.environments and environment not in monitor.environments:
        raise HTTPException(
            status_code=400,
            detail=f"Monitor {name} does not run in environment {environment}",
        )

    outcome = await monitor.run(environment)
    return _outcome_response(outcome)
