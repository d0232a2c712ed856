"""Status transition rules for sport events.

Legal transitions are listed explicitly as ``(current, requested)`` pairs,
each mapped to a guard that decides whether the transition may happen at
the moment of the attempt:

- INACTIVE -> ACTIVE: only while the event's start time is still in the future
- ACTIVE -> FINISHED: always

Every other pair is rejected with a ``TransitionError``.
"""

from collections.abc import Callable
from datetime import datetime

from sportevents.domain import EventStatus, SportEvent, ensure_utc, utc_now

TransitionGuard = Callable[[SportEvent, datetime], bool]


class TransitionError(Exception):
    """Raised when a requested status change is not allowed."""

    def __init__(self, current: EventStatus, requested: EventStatus | str):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Status {_status_name(current)} cannot be changed to {_status_name(requested)}"
        )


def _status_name(status: EventStatus | str) -> str:
    if isinstance(status, EventStatus):
        return status.value
    return str(status)


def _starts_in_future(event: SportEvent, now: datetime) -> bool:
    return event.start_time > now


def _always(event: SportEvent, now: datetime) -> bool:
    return True


TRANSITIONS: dict[tuple[EventStatus, EventStatus], TransitionGuard] = {
    (EventStatus.INACTIVE, EventStatus.ACTIVE): _starts_in_future,
    (EventStatus.ACTIVE, EventStatus.FINISHED): _always,
}


def allowed_transitions(status: EventStatus) -> list[EventStatus]:
    """List the statuses reachable from ``status`` (ignoring guards)."""
    return [target for current, target in TRANSITIONS if current == status]


def attempt_transition(
    event: SportEvent,
    requested: EventStatus | str,
    now: datetime | None = None,
) -> SportEvent:
    """Move ``event`` to ``requested`` status if the transition table allows it.

    Args:
        event: The event to update. Its status is changed in place on success.
        requested: Target status, either an ``EventStatus`` or its string value.
        now: Moment of the attempt (defaults to the current UTC time).

    Returns:
        The same event, now carrying the requested status.

    Raises:
        TransitionError: If the pair is not in the table, its guard fails,
            or ``requested`` is not a known status.
    """
    current = event.status
    try:
        target = EventStatus(requested)
    except ValueError:
        raise TransitionError(current, requested) from None

    guard = TRANSITIONS.get((current, target))
    moment = ensure_utc(now) if now is not None else utc_now()
    if guard is None or not guard(event, moment):
        raise TransitionError(current, target)

    event.status = target
    event.updated_at = moment
    return event
