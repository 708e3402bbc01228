"""
Test the event store operations.
"""
from datetime import datetime, timedelta, timezone

import pytest

from event_finder.services.events import (
    EventFullError,
    EventNotFoundError,
    EventStore,
    EventValidationError,
)
from event_finder.services.sample_events import SAMPLE_EVENTS
from event_finder.tests.conftest import event_payload, iso_in


class TestCreate:
    """Test creating events."""

    def test_create_event_success(self, store: EventStore):
        """Test that a new event starts empty and gets an id and createdAt."""
        event = store.create(event_payload())

        assert event.id
        assert event.title == "Python Meetup"
        assert event.current_participants == 0
        assert event.max_participants == 10
        assert event.created_at is not None
        assert event.date.tzinfo is not None

    def test_create_trims_text_fields(self, store: EventStore):
        event = store.create(event_payload(title="  Padded Title  ", location=" Paris "))

        assert event.title == "Padded Title"
        assert event.location == "Paris"

    def test_create_accepts_numeric_string_capacity(self, store: EventStore):
        event = store.create(event_payload(maxParticipants="25"))
        assert event.max_participants == 25

    def test_create_assigns_unique_ids(self, store: EventStore):
        ids = {store.create(event_payload()).id for _ in range(5)}
        assert len(ids) == 5

    def test_create_rejects_past_date(self, store: EventStore):
        with pytest.raises(EventValidationError, match="Event date must be in the future"):
            store.create(event_payload(date=iso_in(days=-1)))

    def test_create_rejects_date_equal_to_now(self):
        """The date must be strictly after the creation time."""
        now = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
        store = EventStore(clock=lambda: now)

        with pytest.raises(EventValidationError, match="in the future"):
            store.create(event_payload(date=now.isoformat()))

        event = store.create(event_payload(date=(now + timedelta(seconds=1)).isoformat()))
        assert event.created_at == now

    def test_create_rejects_missing_field(self, store: EventStore):
        payload = event_payload()
        del payload["location"]

        with pytest.raises(EventValidationError, match="All fields are required"):
            store.create(payload)

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"title": "ab"}, "Title must be at least 3 characters long"),
            ({"title": "x" * 101}, "Title cannot exceed 100 characters"),
            ({"description": "too short"}, "Description must be at least 10 characters long"),
            ({"maxParticipants": 0}, "Maximum participants must be at least 1"),
            ({"maxParticipants": 1001}, "Maximum participants cannot exceed 1000"),
            ({"date": "next tuesday"}, "Event date is not a valid date"),
        ],
    )
    def test_create_rejects_invalid_fields(self, store: EventStore, overrides, message):
        with pytest.raises(EventValidationError, match=message):
            store.create(event_payload(**overrides))
        assert store.count() == 0


class TestJoin:
    """Test joining events."""

    def test_join_increments_by_one(self, store: EventStore):
        event = store.create(event_payload(maxParticipants=3))

        joined = store.join(event.id)
        assert joined.current_participants == 1

        joined = store.join(event.id)
        assert joined.current_participants == 2
        assert store.get(event.id).current_participants == 2

    def test_join_last_spot_then_full(self, store: EventStore):
        """Test that the last spot can be taken and the next join fails."""
        event = store.create(event_payload(maxParticipants=1))

        assert store.join(event.id).current_participants == 1

        with pytest.raises(EventFullError, match="Event is full"):
            store.join(event.id)
        assert store.get(event.id).current_participants == 1

    def test_join_nonexistent_event(self, store: EventStore):
        with pytest.raises(EventNotFoundError, match="Event not found"):
            store.join("does-not-exist")


class TestListAndGet:
    """Test listing, filtering and fetching events."""

    def test_list_sorted_by_date(self, store: EventStore):
        store.create(event_payload(title="Third", date=iso_in(days=3)))
        store.create(event_payload(title="First", date=iso_in(days=1)))
        store.create(event_payload(title="Second", date=iso_in(days=2)))

        titles = [event.title for event in store.list()]
        assert titles == ["First", "Second", "Third"]

    def test_list_same_date_keeps_creation_order(self, store: EventStore):
        date = iso_in(days=4)
        store.create(event_payload(title="Alpha", date=date))
        store.create(event_payload(title="Beta", date=date))

        assert [event.title for event in store.list()] == ["Alpha", "Beta"]

    def test_list_filters_by_location_case_insensitive(self, store: EventStore):
        store.create(event_payload(title="Berlin One", location="Berlin, Germany"))
        store.create(event_payload(title="Paris One", location="Paris, France"))

        result = store.list(location="berLIN")
        assert [event.title for event in result] == ["Berlin One"]

    def test_list_filters_fold_non_ascii_case(self, store: EventStore):
        store.create(event_payload(title="Oktoberfest", location="MÜNCHEN, Germany"))
        store.create(event_payload(title="Fête de la Musique", description="Concerts partout en ÉTÉ"))

        assert [event.title for event in store.list(location="münchen")] == ["Oktoberfest"]
        assert [event.title for event in store.list(search="été")] == ["Fête de la Musique"]
        assert [event.title for event in store.list(search="FÊTE")] == ["Fête de la Musique"]

    def test_list_search_matches_title_or_description(self, store: EventStore):
        store.create(event_payload(title="Jazz Night", description="Live music by the river"))
        store.create(event_payload(title="Chess Club", description="Weekly jazz-free chess games"))
        store.create(event_payload(title="Board Games", description="Bring your own games please"))

        titles = {event.title for event in store.list(search="JAZZ")}
        assert titles == {"Jazz Night", "Chess Club"}

    def test_list_combines_filters(self, store: EventStore):
        store.create(event_payload(title="Jazz Berlin", location="Berlin"))
        store.create(event_payload(title="Jazz Paris", location="Paris"))

        result = store.list(location="paris", search="jazz")
        assert [event.title for event in result] == ["Jazz Paris"]

    def test_list_ignores_blank_filters(self, store: EventStore):
        store.create(event_payload())
        assert len(store.list(location="   ", search="")) == 1

    def test_list_treats_wildcards_literally(self, store: EventStore):
        store.create(event_payload(title="100% Fun", description="Percent signs are literal here"))
        store.create(event_payload(title="Plain Event", description="Nothing special at all"))

        assert [event.title for event in store.list(search="0%")] == ["100% Fun"]
        assert store.list(search="_") == []

    def test_get_nonexistent_event(self, store: EventStore):
        with pytest.raises(EventNotFoundError):
            store.get("missing")


class TestDelete:
    """Test deleting events."""

    def test_delete_returns_removed_event(self, store: EventStore):
        event = store.create(event_payload())
        store.join(event.id)

        removed = store.delete(event.id)

        assert removed.id == event.id
        assert removed.current_participants == 1
        assert store.count() == 0
        with pytest.raises(EventNotFoundError):
            store.get(event.id)

    def test_delete_nonexistent_event(self, store: EventStore):
        with pytest.raises(EventNotFoundError):
            store.delete("missing")


class TestSeed:
    """Test loading the sample events."""

    def test_seed_sample_events(self, store: EventStore):
        """Sample events are in the past but are still loaded."""
        events = store.seed(SAMPLE_EVENTS)

        assert len(events) == 3
        assert store.count() == 3
        listed = store.list()
        assert [event.title for event in listed] == [
            "Tech Meetup Mumbai",
            "Startup Pitch Night",
            "Photography Workshop",
        ]
        assert listed[0].current_participants == 23
