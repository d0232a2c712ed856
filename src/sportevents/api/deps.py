"""FastAPI dependencies."""

from fastapi import Request

from sportevents.events import NotificationHub
from sportevents.service import SportEventService


async def get_hub(request: Request) -> NotificationHub:
    """Get the notification hub from app state."""
    return request.app.state.hub


async def get_service(request: Request) -> SportEventService:
    """Build a sport event service bound to the app's database and hub."""
    return SportEventService(request.app.state.db, request.app.state.hub)
