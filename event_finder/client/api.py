import logging
from typing import Any, Mapping, Optional

import httpx

from event_finder.core.config import get_api_url

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _log_request(request: httpx.Request) -> None:
    logger.debug("Making %s request to %s", request.method, request.url)


def make_http_client(base_url: Optional[str] = None) -> httpx.Client:
    return httpx.Client(
        base_url=base_url or get_api_url(),
        headers={"Content-Type": "application/json"},
        event_hooks={"request": [_log_request]},
    )


class EventAPI:
    """Thin wrapper over the Event Finder REST API; returns the decoded JSON envelopes."""

    def __init__(self, http: Optional[httpx.Client] = None):
        self.http = http or make_http_client()

    def close(self) -> None:
        self.http.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> dict:
        try:
            response = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API Error: %s", e)
            raise APIError(f"Could not reach the API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            logger.error("API Error: %s %s", response.status_code, body or response.text)
            raise APIError(message or f"Request failed with status {response.status_code}", response.status_code)
        return body

    def get_events(self, filters: Optional[Mapping[str, Optional[str]]] = None) -> dict:
        params = {key: value for key, value in (filters or {}).items() if key in ("location", "search") and value}
        return self._send("GET", "/events", params=params)

    def get_event(self, event_id: str) -> dict:
        return self._send("GET", f"/events/{event_id}")

    def create_event(self, event_data: Mapping[str, Any]) -> dict:
        return self._send("POST", "/events", json=dict(event_data))

    def join_event(self, event_id: str) -> dict:
        return self._send("PUT", f"/events/{event_id}/join")

    def delete_event(self, event_id: str) -> dict:
        return self._send("DELETE", f"/events/{event_id}")

    def health_check(self) -> dict:
        return self._send("GET", "/health")
