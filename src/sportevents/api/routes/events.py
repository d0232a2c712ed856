"""Sport event API routes."""

import asyncio
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from sportevents.api.deps import get_hub, get_service
from sportevents.db import NotFoundError
from sportevents.domain import EventStatus, SportEvent, SportType
from sportevents.events import Notification, NotificationHub, Subscription
from sportevents.lifecycle import TransitionError
from sportevents.service import SportEventService

router = APIRouter()

DEFAULT_HEARTBEAT_INTERVAL = 15.0


class SportEventCreate(BaseModel):
    """Request body for creating a sport event."""

    sport_type: SportType
    status: EventStatus = EventStatus.INACTIVE
    start_time: datetime


class StatusUpdate(BaseModel):
    """Request body for changing an event's status."""

    status: str  # Unknown values are rejected by the transition rules, not validation


@router.post("/create", status_code=201)
async def create_event(
    service: Annotated[SportEventService, Depends(get_service)],
    body: SportEventCreate,
) -> SportEvent:
    """Create a new sport event."""
    return await service.create_event(
        sport_type=body.sport_type,
        start_time=body.start_time,
        status=body.status,
    )


@router.get("")
async def list_events(
    service: Annotated[SportEventService, Depends(get_service)],
    status: EventStatus | None = None,
    sport: SportType | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> list[SportEvent]:
    """List sport events, optionally filtered by status and sport."""
    return await service.list_events(status=status, sport_type=sport, limit=limit, offset=offset)


@router.get("/subscribe")
async def stream_events(
    request: Request,
    hub: Annotated[NotificationHub, Depends(get_hub)],
) -> StreamingResponse:
    """Stream sport event updates as Server-Sent Events.

    Each update arrives as:

        event: sport-event-update
        data: {"id": "...", "sport_type": "FOOTBALL", "status": "ACTIVE", ...}

    Only updates made while the connection is open are delivered.
    """
    heartbeat = getattr(request.app.state, "heartbeat_interval", DEFAULT_HEARTBEAT_INTERVAL)
    return StreamingResponse(
        notification_stream(hub, heartbeat),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/{event_id}")
async def get_event(
    service: Annotated[SportEventService, Depends(get_service)],
    event_id: UUID,
) -> SportEvent:
    """Get a sport event by ID."""
    try:
        return await service.get_event(event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.patch("/{event_id}/status")
async def update_event_status(
    service: Annotated[SportEventService, Depends(get_service)],
    event_id: UUID,
    body: StatusUpdate,
) -> SportEvent:
    """Change an event's status and notify subscribers."""
    try:
        return await service.update_status(event_id, body.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


async def notification_stream(
    hub: NotificationHub,
    heartbeat_interval: float,
) -> AsyncGenerator[str, None]:
    """Render a hub subscription as SSE frames until it ends or the client leaves.

    The subscription is owned by the generator, so it only exists while the
    body is being streamed. A single pending ``get`` is carried across
    heartbeats, so a timeout never discards a dequeued notification.
    """
    subscription: Subscription | None = None
    pending: asyncio.Task[Notification] | None = None
    try:
        subscription = await hub.subscribe()
        while True:
            if pending is None:
                pending = asyncio.ensure_future(subscription.get())
            done, _ = await asyncio.wait({pending}, timeout=heartbeat_interval)
            if not done:
                yield ": ping\n\n"
                continue

            finished, pending = pending, None
            try:
                notification = finished.result()
            except StopAsyncIteration:
                return
            yield notification.to_sse()
    finally:
        if pending is not None:
            pending.cancel()
        if subscription is not None:
            await subscription.close()
