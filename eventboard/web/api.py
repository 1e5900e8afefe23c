import logging
from typing import Any, Dict, List, Optional
import requests

logger = logging.getLogger(__name__)

class EventAPIError(Exception):
    """Raised when the events API call fails or reports ``success: false``."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class EventAPIClient:
    """Client for the events API."""

    def __init__(self, base_url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, user_id: Optional[str] = None, **kwargs) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            EventAPIError: On transport failure, a non-2xx status, an
                undecodable body or a ``success: false`` envelope
        """
        headers = kwargs.pop('headers', {})
        if user_id:
            headers['X-User-Id'] = user_id

        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise EventAPIError(f"Could not reach events API: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise EventAPIError(
                f"Invalid response from events API ({response.status_code})",
                status_code=response.status_code
            ) from e

        if not response.ok or (isinstance(data, dict) and data.get('success') is False):
            message = (data.get('message') or data.get('error')) if isinstance(data, dict) else None
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise EventAPIError(
                message or f"Events API returned {response.status_code}",
                status_code=response.status_code
            )

        return data

    def list_events(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Fetch the events owned by a user, newest first.

        Raises:
            EventAPIError: If the request fails or the response is not a list
        """
        data = self._request('GET', '/api/events', params={'userId': user_id})
        if not isinstance(data, list):
            raise EventAPIError("API response must be a list of events")
        return data

    def get_event(self, event_id: str) -> Dict[str, Any]:
        """Fetch a single event."""
        return self._request('GET', f'/api/events/{event_id}')

    def create_event(self, draft: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        """Create an event and return the persisted record."""
        payload = {**draft, 'userId': user_id}
        data = self._request('POST', '/api/events', user_id=user_id, json=payload)
        return data['event']

    def update_event(self, event_id: str, fields: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        """Replace an event's editable fields and return the stored record."""
        data = self._request('PUT', f'/api/events/{event_id}', user_id=user_id, json=fields)
        return data['event']

    def delete_event(self, event_id: str, user_id: str) -> None:
        """Delete an event."""
        self._request('DELETE', f'/api/events/{event_id}', user_id=user_id)
