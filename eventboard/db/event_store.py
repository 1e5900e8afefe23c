"""Event persistence.

``EventStore`` is the only code that talks to the ``events`` table. It takes
and returns plain dictionaries so callers never hold ORM instances outside a
session:

- input dictionaries are keyed by model attribute names (``short_description``)
- output dictionaries are keyed by wire names (``shortDescription``), with
  ``id`` as an int and ``createdAt`` as an aware UTC datetime
"""

import logging
import math
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select

from .db_core import Database, DatabaseError
from ..models.event import Event, MUTABLE_FIELDS
from ..utils.timezone import now_utc

logger = logging.getLogger(__name__)

EventId = Union[int, str]

class EventNotFoundError(DatabaseError):
    """Raised when no event matches the requested identifier."""

    def __init__(self, event_id: EventId):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id

def _parse_id(event_id: EventId) -> int:
    """Turn a wire identifier into a primary key, or report it as missing."""
    try:
        parsed = int(event_id)
    except (TypeError, ValueError):
        raise EventNotFoundError(event_id)
    if parsed < 1:
        raise EventNotFoundError(event_id)
    return parsed

def coerce_price(value: Any) -> float:
    """Coerce a price to a finite, non-negative float."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid price: {value!r}")
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return price

def _mutable_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the client-settable fields, filling absent ones with None."""
    values = {name: fields.get(name) for name in MUTABLE_FIELDS}
    values['price'] = coerce_price(fields.get('price', 0))
    return values

class EventStore:
    """List, insert, replace and delete events in one table."""

    def __init__(self, database: Database):
        self.database = database

    def list(self, owner_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get events, newest first.

        Args:
            owner_id: Only return events created by this user. When None,
                every event is returned.
        """
        query = select(Event).order_by(Event.created_at.desc(), Event.id.desc())
        if owner_id is not None:
            query = query.where(Event.owner_id == owner_id)

        with self.database.session() as session:
            return [event.to_dict() for event in session.scalars(query)]

    def get(self, event_id: EventId) -> Dict[str, Any]:
        """Get a single event or raise EventNotFoundError."""
        pk = _parse_id(event_id)
        with self.database.session() as session:
            event = session.get(Event, pk)
            if event is None:
                raise EventNotFoundError(event_id)
            return event.to_dict()

    def insert(self, draft: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        """
        Persist a new event.

        The identifier is assigned by the database and ``created_at`` is
        stamped here; any values for either in ``draft`` are ignored.

        Returns:
            The persisted record, including its new identifier.
        """
        if not owner_id:
            raise ValueError("owner_id is required")

        event = Event(
            **_mutable_values(draft),
            owner_id=owner_id,
            created_at=now_utc(),
        )
        with self.database.session() as session:
            session.add(event)
            session.flush()
            record = event.to_dict()

        logger.info(f"Inserted event {record['id']} for owner {owner_id}")
        return record

    def replace(self, event_id: EventId, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite every mutable field of an event.

        ``id``, ``owner_id`` and ``created_at`` are never touched. Optional
        fields missing from ``fields`` are cleared.

        Raises:
            EventNotFoundError: If no event matches; nothing is written.
        """
        pk = _parse_id(event_id)
        values = _mutable_values(fields)
        with self.database.session() as session:
            event = session.get(Event, pk)
            if event is None:
                raise EventNotFoundError(event_id)
            for name, value in values.items():
                setattr(event, name, value)
            session.flush()
            record = event.to_dict()

        logger.info(f"Replaced event {pk}")
        return record

    def delete(self, event_id: EventId) -> None:
        """
        Remove an event.

        Raises:
            EventNotFoundError: If no event matches.
        """
        pk = _parse_id(event_id)
        with self.database.session() as session:
            event = session.get(Event, pk)
            if event is None:
                raise EventNotFoundError(event_id)
            session.delete(event)

        logger.info(f"Deleted event {pk}")
