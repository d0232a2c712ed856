"""Pytest configuration and fixtures."""

import tempfile
from collections.abc import AsyncGenerator, Callable
from datetime import timedelta
from pathlib import Path

import pytest

from sportevents.db.connection import Database
from sportevents.domain import EventStatus, SportEvent, SportType, utc_now
from sportevents.events import NotificationHub


@pytest.fixture
async def db() -> AsyncGenerator[Database, None]:
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        database = Database(Path(tmpdir) / "test.db")
        await database.connect()
        yield database
        await database.disconnect()


@pytest.fixture
def hub() -> NotificationHub:
    """Create a fresh notification hub for each test."""
    return NotificationHub(max_buffer=10)


@pytest.fixture
def make_event() -> Callable[..., SportEvent]:
    """Factory for events starting ``starts_in`` from now (negative = in the past)."""

    def factory(
        status: EventStatus = EventStatus.INACTIVE,
        starts_in: timedelta = timedelta(hours=1),
        sport_type: SportType = SportType.FOOTBALL,
    ) -> SportEvent:
        return SportEvent(sport_type=sport_type, status=status, start_time=utc_now() + starts_in)

    return factory
