"""Dashboard view model.

Drives the signed-in user's dashboard: authentication check, event list,
edit modal and delete confirmation. Rendering is left to the caller; every
list change goes through the events API and is followed by a full re-fetch.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .api import EventAPIClient, EventAPIError

logger = logging.getLogger(__name__)

# Fields shown in the edit modal, by wire name
EDITABLE_FIELDS = (
    'title',
    'shortDescription',
    'fullDescription',
    'date',
    'time',
    'location',
    'category',
    'image',
    'price',
    'priority',
)

class DashboardState(str, Enum):
    CHECKING_AUTH = 'checking_auth'
    REDIRECTED = 'redirected'
    AUTHENTICATED = 'authenticated'
    LOADING = 'loading'
    LOADED = 'loaded'
    EDITING = 'editing'
    CONFIRMING_DELETE = 'confirming_delete'

@dataclass(frozen=True)
class EditForm:
    """Snapshot of the edit modal. Every change produces a new instance.

    ``event_id`` is None while a new event is being drafted.
    """
    event_id: Optional[str]
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    @classmethod
    def from_event(cls, record: Mapping[str, Any]) -> 'EditForm':
        return cls(
            event_id=str(record['id']),
            values={name: record.get(name) for name in EDITABLE_FIELDS},
        )

    @classmethod
    def blank(cls) -> 'EditForm':
        return cls(event_id=None, values={name: None for name in EDITABLE_FIELDS})

    @property
    def is_new(self) -> bool:
        return self.event_id is None

    def with_value(self, name: str, value: Any) -> 'EditForm':
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{name}' cannot be edited")
        return replace(self, values={**self.values, name: value})

    def get(self, name: str, default: Any = '') -> Any:
        value = self.values.get(name)
        return default if value is None else value

    def payload(self) -> Dict[str, Any]:
        return dict(self.values)

Notify = Callable[[str, str], None]

class DashboardView:
    """
    State machine behind the dashboard page.

    Args:
        client: Events API client
        current_user: Returns the signed-in user's id, or None
        notify: Receives ``(level, message)`` for transient notifications;
            level is ``'success'`` or ``'error'``
        navigate: Called with the login URL when nobody is signed in
        login_url: Where to send anonymous visitors
    """

    def __init__(
        self,
        client: EventAPIClient,
        current_user: Callable[[], Optional[str]],
        notify: Notify,
        navigate: Callable[[str], None],
        login_url: str = '/login'
    ):
        self.client = client
        self.current_user = current_user
        self.notify = notify
        self.navigate = navigate
        self.login_url = login_url

        self.state = DashboardState.CHECKING_AUTH
        self.user_id: Optional[str] = None
        self.events: Tuple[Dict[str, Any], ...] = ()
        self.form: Optional[EditForm] = None
        self.saving = False
        self.pending_delete: Optional[str] = None

    def mount(self) -> bool:
        """
        Resolve the signed-in user and load their events.

        Returns:
            False if the visitor was redirected to the login surface
        """
        self.state = DashboardState.CHECKING_AUTH
        user_id = self.current_user()
        if not user_id:
            self.state = DashboardState.REDIRECTED
            self.navigate(self.login_url)
            return False

        self.user_id = user_id
        self.state = DashboardState.AUTHENTICATED
        self.fetch_events()
        return True

    def fetch_events(self) -> None:
        """Reload the full event list. Failures keep the previous list."""
        if not self.user_id:
            return

        self.state = DashboardState.LOADING
        try:
            self.events = tuple(self.client.list_events(self.user_id))
        except EventAPIError as e:
            logger.warning(f"Fetching events for {self.user_id} failed: {e}")
            self.notify('error', "Failed to fetch events")
        finally:
            self.state = DashboardState.LOADED

    def find_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        for record in self.events:
            if str(record.get('id')) == str(event_id):
                return record
        return None

    def open_edit(self, event_id: str) -> bool:
        """Copy an event into the edit form and open the modal."""
        record = self.find_event(event_id)
        if record is None:
            self.notify('error', "Event not found")
            return False

        self.form = EditForm.from_event(record)
        self.state = DashboardState.EDITING
        return True

    def open_new(self) -> None:
        """Open the modal with an empty form for a new event."""
        self.form = EditForm.blank()
        self.state = DashboardState.EDITING

    def update_field(self, name: str, value: Any) -> None:
        if self.form is None:
            raise RuntimeError("No event is being edited")
        self.form = self.form.with_value(name, value)

    def cancel_edit(self) -> None:
        self.form = None
        self.state = DashboardState.LOADED

    def submit_edit(self) -> bool:
        """
        Send the edit form to the API, creating the event if the form is new.

        On success the modal closes and the list is re-fetched. On failure
        the modal stays open with the form untouched.
        """
        if self.form is None:
            raise RuntimeError("No event is being edited")

        creating = self.form.is_new
        self.saving = True
        try:
            if creating:
                self.client.create_event(self.form.payload(), self.user_id)
            else:
                self.client.update_event(self.form.event_id, self.form.payload(), self.user_id)
        except EventAPIError as e:
            logger.warning(f"Saving event {self.form.event_id or '(new)'} failed: {e}")
            # No status code means the request never got an answer
            if creating:
                self.notify('error', "Error creating event" if e.status_code is None else "Create failed")
            else:
                self.notify('error', "Error updating event" if e.status_code is None else "Update failed")
            return False
        finally:
            self.saving = False

        self.notify('success', "Event created!" if creating else "Event updated!")
        self.form = None
        self.state = DashboardState.LOADED
        self.fetch_events()
        return True

    def request_delete(self, event_id: str) -> None:
        """Ask for confirmation before deleting."""
        self.pending_delete = str(event_id)
        self.state = DashboardState.CONFIRMING_DELETE

    def cancel_delete(self) -> None:
        self.pending_delete = None
        self.state = DashboardState.LOADED

    def confirm_delete(self) -> bool:
        """Delete the event awaiting confirmation, then re-fetch."""
        if self.pending_delete is None:
            raise RuntimeError("No deletion awaiting confirmation")

        event_id = self.pending_delete
        self.pending_delete = None
        self.state = DashboardState.LOADED
        try:
            self.client.delete_event(event_id, self.user_id)
        except EventAPIError as e:
            logger.warning(f"Deleting event {event_id} failed: {e}")
            self.notify('error', "Failed to delete event")
            return False

        self.notify('success', "Event deleted")
        self.fetch_events()
        return True
