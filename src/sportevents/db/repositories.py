"""Repository classes for database access."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sportevents.db.connection import Database
from sportevents.domain import EventStatus, SportEvent, SportType, utc_now


class NotFoundError(Exception):
    """Raised when a requested sport event does not exist."""

    def __init__(self, event_id: UUID):
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class SportEventRepository:
    """Repository for SportEvent entities."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, event: SportEvent) -> SportEvent:
        """Persist a new sport event."""
        await self.db.execute(
            """
            INSERT INTO sport_events (id, sport_type, status, start_time, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                str(event.id),
                event.sport_type.value,
                event.status.value,
                event.start_time.isoformat(),
                event.created_at.isoformat(),
                event.updated_at.isoformat(),
            ),
        )
        await self.db.commit()
        return event

    async def get(self, event_id: UUID) -> SportEvent | None:
        """Get a sport event by ID."""
        row = await self.db.fetchone(
            "SELECT * FROM sport_events WHERE id = ?", (str(event_id),)
        )
        if not row:
            return None
        return self._row_to_event(row)

    async def get_or_raise(self, event_id: UUID) -> SportEvent:
        """Get a sport event by ID, raising NotFoundError if it is missing."""
        event = await self.get(event_id)
        if event is None:
            raise NotFoundError(event_id)
        return event

    async def list(
        self,
        status: EventStatus | None = None,
        sport_type: SportType | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[SportEvent]:
        """List sport events, optionally filtered by status and sport."""
        conditions = []
        params: list[Any] = []

        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if sport_type is not None:
            conditions.append("sport_type = ?")
            params.append(sport_type.value)

        query = "SELECT * FROM sport_events"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY start_time ASC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        rows = await self.db.fetchall(query, tuple(params))
        return [self._row_to_event(row) for row in rows]

    async def update(self, event: SportEvent) -> SportEvent:
        """Save the status of an existing sport event."""
        event.updated_at = utc_now()
        cursor = await self.db.execute(
            """
            UPDATE sport_events SET
                sport_type = ?, status = ?, start_time = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                event.sport_type.value,
                event.status.value,
                event.start_time.isoformat(),
                event.updated_at.isoformat(),
                str(event.id),
            ),
        )
        await self.db.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(event.id)
        return event

    def _row_to_event(self, row: Any) -> SportEvent:
        """Convert a database row to a SportEvent."""
        return SportEvent(
            id=UUID(row["id"]),
            sport_type=SportType(row["sport_type"]),
            status=EventStatus(row["status"]),
            start_time=datetime.fromisoformat(row["start_time"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
