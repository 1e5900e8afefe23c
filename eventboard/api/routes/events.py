"""Events router module.

Every store failure is logged here and answered with a generic message;
driver details never reach the client.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse

from ..dependencies import get_event_store
from ...db import EventStore, EventNotFoundError
from ...schemas import EventDraft, EventUpdate, serialize_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message}
    )

def _caller_owns(store: EventStore, event_id: str, caller: str) -> Optional[JSONResponse]:
    """Return an error response unless ``caller`` owns the event."""
    record = store.get(event_id)
    if record['userId'] != caller:
        logger.warning(f"User {caller} denied access to event {event_id}")
        return _failure(403, "Not allowed to modify this event")
    return None

@router.get("/events", response_model=List[Dict[str, Any]])
def list_events(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: EventStore = Depends(get_event_store)
):
    """Get the events owned by ``userId``, newest first."""
    if not user_id:
        return []

    try:
        records = store.list(owner_id=user_id)
    except Exception as e:
        logger.error(f"Error fetching events: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch events"}
        )
    return [serialize_event(record) for record in records]

@router.get("/events/{event_id}")
def get_event(
    event_id: str,
    store: EventStore = Depends(get_event_store)
):
    """Get a single event by ID."""
    try:
        return serialize_event(store.get(event_id))
    except EventNotFoundError:
        return _failure(404, "Event not found")
    except Exception as e:
        logger.error(f"Error fetching event {event_id}: {e}")
        return _failure(500, "Error fetching event")

@router.post("/events")
def create_event(
    draft: EventDraft,
    caller: Optional[str] = Header(None, alias="X-User-Id"),
    store: EventStore = Depends(get_event_store)
):
    """Create an event owned by the calling user."""
    if not caller:
        return _failure(401, "Sign-in required")
    if draft.user_id and draft.user_id != caller:
        logger.warning(f"User {caller} tried to create an event for {draft.user_id}")
        return _failure(403, "userId does not match the signed-in user")

    try:
        record = store.insert(draft.to_model_fields(), owner_id=caller)
    except Exception as e:
        logger.error(f"Error inserting new event: {e}")
        return _failure(500, "Error inserting new event")

    return {
        "success": True,
        "event": serialize_event(record)
    }

@router.put("/events/{event_id}")
def update_event(
    event_id: str,
    fields: EventUpdate,
    caller: Optional[str] = Header(None, alias="X-User-Id"),
    store: EventStore = Depends(get_event_store)
):
    """Replace the editable fields of an event."""
    if not caller:
        return _failure(401, "Sign-in required")

    try:
        denied = _caller_owns(store, event_id, caller)
        if denied:
            return denied
        record = store.replace(event_id, fields.to_model_fields())
    except EventNotFoundError:
        return _failure(404, "Event not found")
    except Exception as e:
        logger.error(f"Error updating event {event_id}: {e}")
        return _failure(500, "Error updating event")

    return {
        "success": True,
        "event": serialize_event(record)
    }

@router.delete("/events/{event_id}")
def delete_event(
    event_id: str,
    caller: Optional[str] = Header(None, alias="X-User-Id"),
    store: EventStore = Depends(get_event_store)
):
    """Delete an event."""
    if not caller:
        return _failure(401, "Sign-in required")

    try:
        denied = _caller_owns(store, event_id, caller)
        if denied:
            return denied
        store.delete(event_id)
    except EventNotFoundError:
        return _failure(404, "Event not found")
    except Exception as e:
        logger.error(f"Error deleting event {event_id}: {e}")
        return _failure(500, "Error deleting event")

    return {"success": True}
