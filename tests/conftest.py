import pytest
from fastapi.testclient import TestClient

from leave_portal.database import InMemoryLeaveStore, seed_sample_data
from leave_portal.main import app, get_store


@pytest.fixture
def store():
    return seed_sample_data(InMemoryLeaveStore())


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
