"""
- Keep tests offline: random secrets never come from random.org
- Provide a fresh in-memory GameStore per test
- Override FastAPI's get_store so routes use that store
- Provide a client fixture (TestClient(app)) that already has the override applied
"""
import os
import random

import pytest
from fastapi.testclient import TestClient

# Must be set before bullscows.config is imported
os.environ["BULLSCOWS_USE_RANDOM_ORG"] = "0"

from bullscows.main import app, get_store
from bullscows.store import GameStore


@pytest.fixture
def store() -> GameStore:
    return GameStore()


@pytest.fixture(autouse=True)
def override_store(store):
    """Force the app to use this test's store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def rng() -> random.Random:
    # Seeded so failures can be replayed
    return random.Random(20240611)
