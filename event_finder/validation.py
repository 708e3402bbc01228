"""
Field rules for events, shared by the API and the command-line create form.

Both sides call :func:`validate_event` so a form rejected on the client is
rejected for the same reason on the server.
"""
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

TITLE_MIN, TITLE_MAX = 3, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 10, 500
LOCATION_MAX = 100
PARTICIPANTS_MIN, PARTICIPANTS_MAX = 1, 1000

REQUIRED_FIELDS = ("title", "description", "location", "date", "maxParticipants")
ALL_FIELDS_REQUIRED = "All fields are required"


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 value into an aware UTC datetime; naive input is taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_participants(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_event(data: Mapping[str, Any], now: Optional[datetime] = None) -> dict[str, str]:
    """
    Check an event payload keyed by wire names.

    Returns field -> message for every failing field, in form order.
    An empty dict means the payload is valid.
    """
    now = now or datetime.now(timezone.utc)
    errors: dict[str, str] = {}

    title = _text(data.get("title"))
    if not title:
        errors["title"] = "Event title is required"
    elif len(title) < TITLE_MIN:
        errors["title"] = f"Title must be at least {TITLE_MIN} characters long"
    elif len(title) > TITLE_MAX:
        errors["title"] = f"Title cannot exceed {TITLE_MAX} characters"

    description = _text(data.get("description"))
    if not description:
        errors["description"] = "Event description is required"
    elif len(description) < DESCRIPTION_MIN:
        errors["description"] = f"Description must be at least {DESCRIPTION_MIN} characters long"
    elif len(description) > DESCRIPTION_MAX:
        errors["description"] = f"Description cannot exceed {DESCRIPTION_MAX} characters"

    location = _text(data.get("location"))
    if not location:
        errors["location"] = "Event location is required"
    elif len(location) > LOCATION_MAX:
        errors["location"] = f"Location cannot exceed {LOCATION_MAX} characters"

    raw_date = data.get("date")
    if _is_blank(raw_date):
        errors["date"] = "Event date is required"
    else:
        date = parse_date(raw_date)
        if date is None:
            errors["date"] = "Event date is not a valid date"
        elif date <= now:
            errors["date"] = "Event date must be in the future"

    raw_max = data.get("maxParticipants")
    if _is_blank(raw_max):
        errors["maxParticipants"] = "Maximum participants is required"
    else:
        max_participants = parse_participants(raw_max)
        if max_participants is None or max_participants < PARTICIPANTS_MIN:
            errors["maxParticipants"] = f"Maximum participants must be at least {PARTICIPANTS_MIN}"
        elif max_participants > PARTICIPANTS_MAX:
            errors["maxParticipants"] = f"Maximum participants cannot exceed {PARTICIPANTS_MAX}"

    return errors


def first_error(data: Mapping[str, Any], now: Optional[datetime] = None) -> Optional[str]:
    """Single message for an API response, or None when the payload is valid."""
    if any(_is_blank(data.get(field)) for field in REQUIRED_FIELDS):
        return ALL_FIELDS_REQUIRED
    errors = validate_event(data, now)
    if not errors:
        return None
    return next(iter(errors.values()))
