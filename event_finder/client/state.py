"""
Client-side event state.

A single immutable :class:`EventState` is replaced, never edited, by
:func:`event_reducer` for each dispatched :class:`Action`.
"""
import enum
from dataclasses import dataclass, field, replace
from typing import Any, Optional


class ActionType(str, enum.Enum):
    SET_LOADING = "SET_LOADING"
    SET_ERROR = "SET_ERROR"
    SET_EVENTS = "SET_EVENTS"
    ADD_EVENT = "ADD_EVENT"
    UPDATE_EVENT = "UPDATE_EVENT"
    DELETE_EVENT = "DELETE_EVENT"
    SET_FILTERS = "SET_FILTERS"
    CLEAR_ERROR = "CLEAR_ERROR"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


@dataclass(frozen=True)
class Filters:
    location: str = ""
    search: str = ""

    def as_params(self) -> dict:
        return {"location": self.location, "search": self.search}


@dataclass(frozen=True)
class EventState:
    events: tuple = ()
    loading: bool = False
    error: Optional[str] = None
    filters: Filters = field(default_factory=Filters)


initial_state = EventState()


def event_reducer(state: EventState, action: Action) -> EventState:
    kind = action.type
    payload = action.payload

    if kind == ActionType.SET_LOADING:
        return replace(state, loading=bool(payload))

    if kind == ActionType.SET_ERROR:
        return replace(state, error=payload, loading=False)

    if kind == ActionType.SET_EVENTS:
        return replace(state, events=tuple(payload or ()), loading=False, error=None)

    if kind == ActionType.ADD_EVENT:
        return replace(state, events=(payload,) + state.events)

    if kind == ActionType.UPDATE_EVENT:
        return replace(
            state,
            events=tuple(payload if event["id"] == payload["id"] else event for event in state.events),
        )

    if kind == ActionType.DELETE_EVENT:
        return replace(state, events=tuple(event for event in state.events if event["id"] != payload))

    if kind == ActionType.SET_FILTERS:
        return replace(state, filters=replace(state.filters, **payload))

    if kind == ActionType.CLEAR_ERROR:
        return replace(state, error=None)

    return state
