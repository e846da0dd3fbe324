"""Escalation policy: decides which failing runs send a notification."""

from vigil.monitors.errors import ConfigurationError


def should_notify(failure_count: int, notify_after: int, notify_every: int) -> bool:
    """Decide whether a failing run should notify.

    The first notification fires on the ``notify_after``-th consecutive
    failure. Later ones fire whenever ``failure_count + notify_after`` is a
    multiple of ``notify_every``.

    Example (notify_after=3, notify_every=2):
        counts 1..7 -> notify at 3, 5, 7

    Args:
        failure_count: Consecutive failures including this run
        notify_after: Failures required before the first notification
        notify_every: Cadence of repeat notifications

    Returns:
        True if this run should notify

    Raises:
        ConfigurationError: If either threshold is not positive
    """
    if notify_after <= 0 or notify_every <= 0:
        raise ConfigurationError(
            f"Thresholds must be positive (notify_after={notify_after}, "
            f"notify_every={notify_every})"
        )

    if failure_count < notify_after:
        return False

    return failure_count == notify_after or (failure_count + notify_after) % notify_every == 0
