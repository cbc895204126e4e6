"""Shared fixtures: sample catalog records and an API client over in-memory stores."""

import pytest
from fastapi.testclient import TestClient

from server.app import create_app
from server.config import ServerConfig
from server.services import (
    InMemoryCatalogProvider,
    InMemoryInteractionStore,
    InMemorySocialGraphStore,
)
from server.state import AppState, set_state


@pytest.fixture
def itinerary():
    return {
        "id": "itin-1",
        "title": "Beach Vacation",
        "type": "trip",
        "location": "Lisbon, Portugal",
        "startDate": "2025-07-01",
        "likes": 500,
        "travelStyle": "relaxed",
        "budget": "medium",
    }


@pytest.fixture
def deal():
    return {
        "id": "deal-1",
        "title": "Hotel Deal",
        "type": "hotel",
        "price": 100,
        "originalPrice": 200,
        "discount": 50,
    }


@pytest.fixture
def promotion():
    return {
        "id": "promo-1",
        "title": "Summer Promo",
        "type": "business",
        "startDate": "2025-06-15",
        "endDate": "2025-08-15",
        "status": "active",
    }


@pytest.fixture
def destination():
    return {"id": "dest-1", "name": "Kyoto", "country": "Japan", "popularity": 0.9, "tags": ["temples"]}


@pytest.fixture
def user_profile():
    return {"id": "user-4", "name": "Test User", "username": "testuser"}


@pytest.fixture
def empty_pools():
    return {"itineraries": [], "deals": [], "promotions": [], "destinations": [], "users": []}


@pytest.fixture
def empty_preferences():
    return {"likes": [], "searches": [], "views": [], "categories": []}


@pytest.fixture
def empty_social():
    return {"friends": {}, "following": []}


@pytest.fixture
def app_state():
    """AppState with empty in-memory stores, installed as the global state."""
    state = AppState(ServerConfig())
    state.catalog = InMemoryCatalogProvider()
    state.social_store = InMemorySocialGraphStore()
    state.interaction_store = InMemoryInteractionStore()
    set_state(state)
    yield state
    set_state(None)


@pytest.fixture
def client(app_state):
    with TestClient(create_app()) as c:
        yield c
