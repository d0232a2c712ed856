"""Domain models for sport events."""

from sportevents.domain.enums import EventStatus, SportType
from sportevents.domain.models import SportEvent, ensure_utc, utc_now

__all__ = [
    "EventStatus",
    "SportType",
    "SportEvent",
    "ensure_utc",
    "utc_now",
]
