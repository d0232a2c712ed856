"""Sport event service coordinating persistence, lifecycle and notifications.

Status changes always follow the same path:
1. Load the current event (``NotFoundError`` if missing)
2. Validate and apply the transition (``TransitionError`` if illegal)
3. Persist the updated event
4. Broadcast it to every attached subscriber

Nothing is persisted or broadcast when an earlier step fails.
"""

import logging
from datetime import datetime
from uuid import UUID

from sportevents.db import Database, SportEventRepository
from sportevents.domain import EventStatus, SportEvent, SportType
from sportevents.events import NotificationHub
from sportevents.lifecycle import attempt_transition

logger = logging.getLogger(__name__)


class SportEventService:
    """Entry point for creating, querying and transitioning sport events."""

    def __init__(self, db: Database, hub: NotificationHub):
        self.repo = SportEventRepository(db)
        self.hub = hub

    async def create_event(
        self,
        sport_type: SportType,
        start_time: datetime,
        status: EventStatus = EventStatus.INACTIVE,
    ) -> SportEvent:
        """Create and persist a new event with the supplied status."""
        event = SportEvent(sport_type=sport_type, status=status, start_time=start_time)
        created = await self.repo.create(event)
        logger.info(f"Created {created.sport_type.value} event {created.id} ({created.status.value})")
        return created

    async def list_events(
        self,
        status: EventStatus | None = None,
        sport_type: SportType | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[SportEvent]:
        return await self.repo.list(status=status, sport_type=sport_type, limit=limit, offset=offset)

    async def get_event(self, event_id: UUID) -> SportEvent:
        return await self.repo.get_or_raise(event_id)

    async def update_status(
        self,
        event_id: UUID,
        requested: EventStatus | str,
        now: datetime | None = None,
    ) -> SportEvent:
        """Transition an event's status, persist it and notify subscribers."""
        event = await self.repo.get_or_raise(event_id)
        previous = event.status
        attempt_transition(event, requested, now=now)
        updated = await self.repo.update(event)
        await self.hub.broadcast(updated)
        logger.info(f"Event {updated.id} status {previous.value} -> {updated.status.value}")
        return updated
