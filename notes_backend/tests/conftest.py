import os

# Must be set before the app module builds its engine and token service.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from notes_backend.src.api.deps import get_db
from notes_backend.src.api.main import app
from notes_database import Base, make_engine, make_session_factory


class FakeClock:
    """Deterministic clock: every call advances one second."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test, shared across threads."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a SQLAlchemy session for isolated test usage."""
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """Fixture for FastAPI TestClient with test DB dependency override."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 10, 30, 0))


@pytest.fixture
def auth_service():
    return app.state.auth_service


@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {"username": "alice", "password": "secret1"}


@pytest.fixture
def second_user_data():
    """Returns a second user's data."""
    return {"username": "bob", "password": "bobpassword456"}


def register_and_auth(client, username, password):
    """Helper for registering a user and returning its bearer token."""
    r = client.post("/api/register", json={"username": username, "password": password})
    assert r.status_code == 201, r.text
    return r.json()["token"]


@pytest.fixture
def auth_header(client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for default user."""
    token = register_and_auth(client, user_data["username"], user_data["password"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns auth header for second user."""
    token = register_and_auth(client, second_user_data["username"], second_user_data["password"])
    return {"Authorization": f"Bearer {token}"}
