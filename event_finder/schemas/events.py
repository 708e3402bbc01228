from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Event ----------
class EventCreate(CamelModel):
    # Range and date rules live in event_finder.validation, shared with the create form
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    max_participants: Optional[Union[StrictInt, str]] = None

    def as_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class EventOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    title: str
    description: str
    location: str
    date: datetime
    max_participants: int
    current_participants: int = Field(ge=0)
    created_at: datetime


class EventFilters(BaseModel):
    location: Optional[str] = None
    search: Optional[str] = None


# ---------- Envelopes ----------
class EventResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: EventOut


class EventListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[EventOut]


class HealthOut(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    events_count: int


class ErrorOut(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
