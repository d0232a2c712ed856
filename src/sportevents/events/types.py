"""Notification payloads pushed to subscribers."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from sportevents.domain import SportEvent, utc_now

SPORT_EVENT_UPDATE = "sport-event-update"


class Notification(BaseModel):
    """A single pushed message describing an event's updated state."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    event: str = SPORT_EVENT_UPDATE
    data: str
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_sport_event(cls, sport_event: SportEvent) -> "Notification":
        """Build an update notification from the event's current state."""
        return cls(data=sport_event.to_text())

    def to_sse(self) -> str:
        """Render as a Server-Sent Events frame."""
        lines = [f"event: {self.event}"]
        lines.extend(f"data: {line}" for line in self.data.splitlines() or [""])
        return "\n".join(lines) + "\n\n"
