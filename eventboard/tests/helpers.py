"""Test doubles and sample data shared across test modules."""

from eventboard.config.web import Config
from eventboard.web.api import EventAPIError


def make_draft(**overrides):
    draft = {
        'title': 'Spring Gala',
        'short_description': 'An evening of music',
        'full_description': 'Live band, dinner and dancing.',
        'date': '2026-05-01',
        'time': '19:30',
        'location': 'Town Hall',
        'category': 'Music',
        'image': 'gala.jpg',
        'price': 25.0,
        'priority': 'high',
    }
    draft.update(overrides)
    return draft


class FakeEventAPI:
    """Stands in for EventAPIClient; keeps events in a list."""

    def __init__(self, events=None):
        self.events = list(events or [])
        self.calls = []
        self.fail = {}

    def _maybe_fail(self, operation):
        if operation in self.fail:
            raise self.fail[operation]

    def list_events(self, user_id):
        self.calls.append(('list', user_id))
        self._maybe_fail('list')
        return [dict(event) for event in self.events if event['userId'] == user_id]

    def get_event(self, event_id):
        self.calls.append(('get', event_id))
        self._maybe_fail('get')
        for event in self.events:
            if event['id'] == event_id:
                return dict(event)
        raise EventAPIError("Event not found", status_code=404)

    def create_event(self, draft, user_id):
        self.calls.append(('create', draft, user_id))
        self._maybe_fail('create')
        event = sample_event(str(len(self.events) + 100), user_id=user_id, **draft)
        self.events.insert(0, event)
        return dict(event)

    def update_event(self, event_id, fields, user_id):
        self.calls.append(('update', event_id, fields, user_id))
        self._maybe_fail('update')
        for event in self.events:
            if event['id'] == event_id:
                event.update(fields)
                return dict(event)
        raise EventAPIError("Event not found", status_code=404)

    def delete_event(self, event_id, user_id):
        self.calls.append(('delete', event_id, user_id))
        self._maybe_fail('delete')
        self.events = [event for event in self.events if event['id'] != event_id]


def sample_event(event_id='1', user_id='abc', **overrides):
    event = {
        'id': event_id,
        'title': f'Event {event_id}',
        'shortDescription': 'Short',
        'fullDescription': 'Long',
        'date': '2026-05-01',
        'time': '19:30',
        'location': 'Town Hall',
        'category': 'Music',
        'image': None,
        'price': 10.0,
        'priority': None,
        'userId': user_id,
        'createdAt': '2026-04-01T12:00:00+00:00',
    }
    event.update(overrides)
    return event


class WebTestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test'
    LOGIN_URL = '/login'
