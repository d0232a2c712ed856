"""Event lifecycle management: which status changes are legal."""

from sportevents.lifecycle.transitions import (
    TRANSITIONS,
    TransitionError,
    allowed_transitions,
    attempt_transition,
)

__all__ = [
    "TRANSITIONS",
    "TransitionError",
    "allowed_transitions",
    "attempt_transition",
]
