import logging
import time
from typing import Any, Callable, Mapping, Optional

from event_finder.client.api import APIError, EventAPI
from event_finder.client.state import Action, ActionType, EventState, event_reducer, initial_state

logger = logging.getLogger(__name__)

ERROR_DISPLAY_SECONDS = 5.0


class EventContext:
    """
    Shared client store: holds the current EventState and runs API calls
    that feed actions into the reducer.

    Errors stay visible for ERROR_DISPLAY_SECONDS, after which
    expire_error() clears them.
    """

    def __init__(self, api: EventAPI, clock: Callable[[], float] = time.monotonic):
        self.api = api
        self.state: EventState = initial_state
        self._clock = clock
        self._error_set_at: Optional[float] = None
        self._listeners: list[Callable[[EventState], None]] = []

    def subscribe(self, listener: Callable[[EventState], None]) -> None:
        self._listeners.append(listener)

    def dispatch(self, action: Action) -> EventState:
        self.state = event_reducer(self.state, action)
        if action.type == ActionType.SET_ERROR:
            self._error_set_at = self._clock()
        elif self.state.error is None:
            self._error_set_at = None
        for listener in self._listeners:
            listener(self.state)
        return self.state

    def _fail(self, error: APIError, fallback: str) -> None:
        self.dispatch(Action(ActionType.SET_ERROR, error.message or fallback))

    def load_events(self, filters: Optional[Mapping[str, str]] = None) -> None:
        self.dispatch(Action(ActionType.SET_LOADING, True))
        try:
            response = self.api.get_events(filters)
        except APIError as e:
            self._fail(e, "Failed to load events")
            return
        self.dispatch(Action(ActionType.SET_EVENTS, response.get("data", [])))

    def create_event(self, event_data: Mapping[str, Any]) -> dict:
        self.dispatch(Action(ActionType.SET_LOADING, True))
        try:
            response = self.api.create_event(event_data)
        except APIError as e:
            self._fail(e, "Failed to create event")
            raise
        self.dispatch(Action(ActionType.ADD_EVENT, response["data"]))
        self.dispatch(Action(ActionType.SET_LOADING, False))
        return response

    def join_event(self, event_id: str) -> dict:
        try:
            response = self.api.join_event(event_id)
        except APIError as e:
            self._fail(e, "Failed to join event")
            raise
        self.dispatch(Action(ActionType.UPDATE_EVENT, response["data"]))
        return response

    def delete_event(self, event_id: str) -> dict:
        try:
            response = self.api.delete_event(event_id)
        except APIError as e:
            self._fail(e, "Failed to delete event")
            raise
        self.dispatch(Action(ActionType.DELETE_EVENT, event_id))
        return response

    def set_filters(self, location: Optional[str] = None, search: Optional[str] = None) -> None:
        changes = {}
        if location is not None:
            changes["location"] = location
        if search is not None:
            changes["search"] = search
        self.dispatch(Action(ActionType.SET_FILTERS, changes))

    def clear_error(self) -> None:
        self.dispatch(Action(ActionType.CLEAR_ERROR))

    def expire_error(self) -> bool:
        """Clear the error once it has been shown long enough; True if it was cleared."""
        if self.state.error is None or self._error_set_at is None:
            return False
        if self._clock() - self._error_set_at < ERROR_DISPLAY_SECONDS:
            return False
        self.clear_error()
        return True
