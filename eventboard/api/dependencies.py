"""Request-scoped dependencies for the API routers."""

from fastapi import Request

from ..db import EventStore

def get_event_store(request: Request) -> EventStore:
    """Return the event store created by the application factory."""
    return request.app.state.event_store
