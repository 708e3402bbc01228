from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, Mapping, Optional

from sqlalchemy import String, delete, func, or_, select, update
from sqlalchemy.orm import Session

from event_finder.database.db import make_engine, make_session_factory
from event_finder.models.events import Event
from event_finder.validation import first_error, parse_date, parse_participants

logger = logging.getLogger(__name__)


class EventError(Exception):
    pass


class EventNotFoundError(EventError):
    def __init__(self, event_id: str):
        super().__init__("Event not found")
        self.event_id = event_id


class EventFullError(EventError):
    def __init__(self, event_id: str):
        super().__init__("Event is full")
        self.event_id = event_id


class EventValidationError(EventError):
    pass


def _contains(column, needle: str):
    # casefold is registered on the connection by make_engine
    return func.casefold(column, type_=String).contains(needle.casefold(), autoescape=True)


class EventStore:
    """
    In-memory event collection behind explicit create/read/update/delete calls.

    Every operation runs under one lock and in its own session, so callers
    never share ORM state and returned events are detached snapshots.
    """

    def __init__(self, clock=None):
        self._engine = make_engine()
        self._sessions = make_session_factory(self._engine)
        self._lock = threading.Lock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock:
            db: Session = self._sessions()
            try:
                with db.begin():
                    yield db
            finally:
                db.close()

    def list(self, location: Optional[str] = None, search: Optional[str] = None) -> list[Event]:
        """Events matching both filters, upcoming first."""
        stmt = select(Event)
        if location and location.strip():
            stmt = stmt.where(_contains(Event.location, location.strip()))
        if search and search.strip():
            needle = search.strip()
            stmt = stmt.where(or_(_contains(Event.title, needle), _contains(Event.description, needle)))
        stmt = stmt.order_by(Event.date, Event.seq)
        with self._session() as db:
            return list(db.scalars(stmt))

    def get(self, event_id: str) -> Event:
        with self._session() as db:
            return self._get_in_session(db, event_id)

    def create(self, data: Mapping[str, Any]) -> Event:
        """Validate a wire-named payload and store it as a new event."""
        now = self._clock()
        message = first_error(data, now)
        if message:
            raise EventValidationError(message)

        event = Event(
            title=data["title"].strip(),
            description=data["description"].strip(),
            location=data["location"].strip(),
            date=parse_date(data["date"]),
            max_participants=parse_participants(data["maxParticipants"]),
            current_participants=0,
            created_at=now,
        )
        with self._session() as db:
            db.add(event)
            db.flush()
        logger.info("Created event %s (%r, max %d)", event.id, event.title, event.max_participants)
        return event

    def join(self, event_id: str) -> Event:
        """Take one spot; raises EventFullError once no spots are left."""
        with self._session() as db:
            self._get_in_session(db, event_id)
            stmt = (
                update(Event)
                .where(Event.id == event_id)
                .where(Event.current_participants < Event.max_participants)
                .values(current_participants=Event.current_participants + 1)
            )
            res = db.execute(stmt)
            if res.rowcount != 1:  # type: ignore
                raise EventFullError(event_id)
            event = db.execute(
                select(Event).where(Event.id == event_id).execution_options(populate_existing=True)
            ).scalar_one()
        logger.info("Joined event %s (%d/%d)", event_id, event.current_participants, event.max_participants)
        return event

    def delete(self, event_id: str) -> Event:
        """Remove an event and return it as it was."""
        with self._session() as db:
            event = self._get_in_session(db, event_id)
            db.execute(delete(Event).where(Event.id == event_id))
        logger.info("Deleted event %s", event_id)
        return event

    def count(self) -> int:
        with self._session() as db:
            return int(db.scalar(select(func.count(Event.seq))) or 0)

    def seed(self, records: Iterable[Mapping[str, Any]]) -> list[Event]:
        """Insert ready-made records as-is, skipping the future-date rule."""
        now = self._clock()
        events = [
            Event(
                title=record["title"],
                description=record["description"],
                location=record["location"],
                date=parse_date(record["date"]),
                max_participants=record["maxParticipants"],
                current_participants=record.get("currentParticipants", 0),
                created_at=now,
            )
            for record in records
        ]
        with self._session() as db:
            db.add_all(events)
            db.flush()
        return events

    @staticmethod
    def _get_in_session(db: Session, event_id: str) -> Event:
        event = db.scalar(select(Event).where(Event.id == event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event
