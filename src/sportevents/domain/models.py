"""Core domain models for sport events."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from sportevents.domain.enums import EventStatus, SportType


def utc_now() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class SportEvent(BaseModel):
    """A sporting occasion tracked by status and scheduled start time."""

    id: UUID = Field(default_factory=uuid4)
    sport_type: SportType
    status: EventStatus = EventStatus.INACTIVE
    start_time: datetime
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("start_time", "created_at", "updated_at")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def to_text(self) -> str:
        """Textual representation pushed to subscribers."""
        return self.model_dump_json()
