"""Request and response schemas."""

from .event import EventDraft, EventUpdate, serialize_event

__all__ = ['EventDraft', 'EventUpdate', 'serialize_event']
