"""Tests for the sport event service (load, transition, persist, broadcast)."""

import asyncio
import json
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from sportevents.db import NotFoundError, SportEventRepository
from sportevents.domain import EventStatus, SportType
from sportevents.lifecycle import TransitionError
from sportevents.service import SportEventService


@pytest.fixture
def service(db, hub) -> SportEventService:
    return SportEventService(db, hub)


async def test_create_defaults_to_inactive(service: SportEventService):
    start = datetime(2030, 3, 1, 15, 0, tzinfo=UTC)

    created = await service.create_event(SportType.BASEBALL, start)

    assert created.status == EventStatus.INACTIVE
    assert (await service.get_event(created.id)).start_time == start


async def test_activate_future_event_broadcasts(service: SportEventService, hub):
    """Football event starting in an hour activates and notifies every subscriber."""
    created = await service.create_event(
        SportType.FOOTBALL, datetime.now(UTC) + timedelta(hours=1)
    )
    subscribers = [await hub.subscribe() for _ in range(3)]

    updated = await service.update_status(created.id, EventStatus.ACTIVE)

    assert updated.status == EventStatus.ACTIVE
    assert (await service.get_event(created.id)).status == EventStatus.ACTIVE
    for subscription in subscribers:
        notification = await asyncio.wait_for(subscription.get(), timeout=1.0)
        assert notification.event == "sport-event-update"
        payload = json.loads(notification.data)
        assert payload["id"] == str(created.id)
        assert payload["status"] == "ACTIVE"
        assert subscription.pending() == 0


async def test_activate_past_event_fails_without_broadcast(service: SportEventService, hub):
    """Event that started an hour ago cannot be activated and nothing is sent."""
    created = await service.create_event(
        SportType.FOOTBALL, datetime.now(UTC) - timedelta(hours=1)
    )
    subscription = await hub.subscribe()

    with pytest.raises(TransitionError):
        await service.update_status(created.id, EventStatus.ACTIVE)

    assert subscription.pending() == 0
    assert (await service.get_event(created.id)).status == EventStatus.INACTIVE


async def test_full_lifecycle(service: SportEventService, hub):
    created = await service.create_event(
        SportType.BASKETBALL, datetime.now(UTC) + timedelta(minutes=10)
    )
    subscription = await hub.subscribe()

    await service.update_status(created.id, "ACTIVE")
    await service.update_status(created.id, "FINISHED")

    statuses = []
    for _ in range(2):
        notification = await asyncio.wait_for(subscription.get(), timeout=1.0)
        statuses.append(json.loads(notification.data)["status"])
    assert statuses == ["ACTIVE", "FINISHED"]

    with pytest.raises(TransitionError):
        await service.update_status(created.id, "ACTIVE")


async def test_missing_event(service: SportEventService, hub):
    subscription = await hub.subscribe()

    with pytest.raises(NotFoundError):
        await service.update_status(uuid4(), EventStatus.ACTIVE)

    assert subscription.pending() == 0


async def test_persistence_failure_skips_broadcast(service: SportEventService, hub, monkeypatch):
    """A transition that cannot be saved is never announced."""
    created = await service.create_event(
        SportType.TENNIS, datetime.now(UTC) + timedelta(hours=1)
    )
    subscription = await hub.subscribe()

    async def failing_update(self, event):
        raise RuntimeError("disk full")

    monkeypatch.setattr(SportEventRepository, "update", failing_update)

    with pytest.raises(RuntimeError):
        await service.update_status(created.id, EventStatus.ACTIVE)

    assert subscription.pending() == 0


async def test_list_events(service: SportEventService):
    start = datetime.now(UTC) + timedelta(days=1)
    await service.create_event(SportType.HOCKEY, start)
    await service.create_event(SportType.HOCKEY, start, status=EventStatus.ACTIVE)

    assert len(await service.list_events(sport_type=SportType.HOCKEY)) == 2
    assert len(await service.list_events(status=EventStatus.ACTIVE)) == 1
