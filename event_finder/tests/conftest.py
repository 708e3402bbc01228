from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from event_finder.client.api import EventAPI
from event_finder.main import create_app
from event_finder.services.events import EventStore


def iso_in(**delta) -> str:
    """ISO timestamp relative to now, e.g. iso_in(days=1)."""
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat()


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Python Meetup",
        "description": "An evening of talks about Python packaging",
        "location": "Berlin, Germany",
        "date": iso_in(days=1),
        "maxParticipants": 10,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> EventStore:
    """A fresh, empty in-memory store per test."""
    return EventStore()


@pytest.fixture
def app(store: EventStore):
    return create_app(store=store, seed=False)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def api(app):
    with TestClient(app, base_url="http://testserver/api") as http:
        yield EventAPI(http)


@pytest.fixture
def created_event(client: TestClient) -> dict:
    response = client.post("/api/events", json=event_payload())
    assert response.status_code == 201, f"Unexpected status: {response.status_code} {response.text}"
    return response.json()["data"]
