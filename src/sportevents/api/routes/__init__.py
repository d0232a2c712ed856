"""API route modules."""

from sportevents.api.routes import events

__all__ = ["events"]
