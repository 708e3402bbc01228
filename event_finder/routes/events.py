from fastapi import APIRouter, Depends, HTTPException, Request, status

from event_finder.schemas.events import (
    ErrorOut,
    EventCreate,
    EventFilters,
    EventListResponse,
    EventResponse,
)
from event_finder.services.events import (
    EventFullError,
    EventNotFoundError,
    EventStore,
    EventValidationError,
)

router = APIRouter(prefix="/api/events", tags=["events"])

NOT_FOUND = {404: {"model": ErrorOut}}
BAD_REQUEST = {400: {"model": ErrorOut}}


def get_store(request: Request) -> EventStore:
    return request.app.state.store


@router.get("", response_model=EventListResponse)
def list_events(filters: EventFilters = Depends(), store: EventStore = Depends(get_store)):
    events = store.list(location=filters.location, search=filters.search)
    return {"success": True, "count": len(events), "data": events}


@router.get("/{event_id}", response_model=EventResponse, response_model_exclude_none=True, responses=NOT_FOUND)
def get_event(event_id: str, store: EventStore = Depends(get_store)):
    try:
        event = store.get(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "data": event}


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED, responses=BAD_REQUEST)
def create_event(payload: EventCreate, store: EventStore = Depends(get_store)):
    try:
        event = store.create(payload.as_wire())
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "message": "Event created successfully", "data": event}


@router.put("/{event_id}/join", response_model=EventResponse, responses={**NOT_FOUND, **BAD_REQUEST})
def join_event(event_id: str, store: EventStore = Depends(get_store)):
    try:
        event = store.join(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventFullError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "message": "Successfully joined the event", "data": event}


@router.delete("/{event_id}", response_model=EventResponse, responses=NOT_FOUND)
def delete_event(event_id: str, store: EventStore = Depends(get_store)):
    try:
        event = store.delete(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Event deleted successfully", "data": event}
