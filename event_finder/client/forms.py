from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from event_finder.validation import parse_participants, validate_event

MIN_LEAD_TIME = timedelta(minutes=30)


def min_datetime(now: Optional[datetime] = None) -> str:
    """Earliest date suggested to the user, in datetime-local form."""
    now = now or datetime.now(timezone.utc)
    return (now + MIN_LEAD_TIME).strftime("%Y-%m-%dT%H:%M")


@dataclass
class CreateEventForm:
    title: str = ""
    description: str = ""
    location: str = ""
    date: str = ""
    max_participants: str = ""
    errors: dict = field(default_factory=dict)

    def as_wire(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "date": self.date,
            "maxParticipants": self.max_participants,
        }

    def validate(self, now: Optional[datetime] = None) -> bool:
        self.errors = validate_event(self.as_wire(), now)
        return not self.errors

    def update(self, name: str, value: str) -> None:
        """Set a field and drop its stale error."""
        setattr(self, name, value)
        self.errors.pop(name, None)
        if name == "max_participants":
            self.errors.pop("maxParticipants", None)

    def to_payload(self) -> dict:
        payload = self.as_wire()
        payload["maxParticipants"] = parse_participants(self.max_participants)
        return payload

    def has_content(self) -> bool:
        return any((self.title, self.description, self.location, self.date))
