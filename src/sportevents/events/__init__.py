"""Real-time notification fan-out for sport event updates."""

from sportevents.events.bus import NotificationHub, Subscription
from sportevents.events.types import SPORT_EVENT_UPDATE, Notification

__all__ = ["Notification", "NotificationHub", "SPORT_EVENT_UPDATE", "Subscription"]
