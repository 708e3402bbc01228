from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from event_finder.routes.events import get_store
from event_finder.schemas.events import HealthOut
from event_finder.services.events import EventStore

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthOut)
def health(store: EventStore = Depends(get_store)):
    """Liveness check with the number of stored events."""
    return {
        "success": True,
        "message": "Event Finder API is running",
        "timestamp": datetime.now(timezone.utc),
        "events_count": store.count(),
    }
