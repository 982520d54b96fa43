"""Pytest fixtures: SQLite database and a TestClient with external services faked."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("TIMEZONE", "Europe/Rome")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.dependencies import get_geocoder, get_mailer, get_now  # noqa: E402
from app.errors import UnexpectedError  # noqa: E402
from app.main import app  # noqa: E402
from app.security import hash_password  # noqa: E402
from app.services.geocoding import GeocodeResult  # noqa: E402

# Import all models so they register with Base.metadata
from app.models.user import User                 # noqa: F401,E402
from app.models.event import Event, Category     # noqa: F401,E402
from app.models.attendee import EventAttendee    # noqa: F401,E402
from app.models.comment import Comment           # noqa: F401,E402

SQLITE_URL = "sqlite:///./test.db"

# Friday 2024-03-15 10:00 local time
FIXED_NOW = datetime(2024, 3, 15, 10, 0, 0)


class FakeGeocoder:
    """Stands in for GeocodingClient; unknown addresses fail like a ZERO_RESULTS answer."""

    def __init__(self):
        self.known = {}
        self.calls = []

    def geocode(self, address):
        self.calls.append(address)
        if address in self.known:
            lat, lng = self.known[address]
            return GeocodeResult.success(lat, lng)
        return GeocodeResult.failure("no results")


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to_email, subject, body, html=None, reply_to=None):
        if self.fail:
            raise UnexpectedError("Failed to send email")
        self.sent.append({
            "to": to_email,
            "subject": subject,
            "body": body,
            "html": html,
            "reply_to": reply_to,
        })


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def geocoder():
    fake = FakeGeocoder()
    fake.known["Parco Sempione, Milano"] = (45.4725, 9.1774)
    return fake


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture(scope="function")
def client(db_engine, geocoder, mailer):
    """FastAPI TestClient with the database and outbound services overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def register_user(client: TestClient, first_name: str = "Test", last_name: str = "User",
                  email: str = None, password: str = "secret123") -> tuple[dict, dict]:
    """Helper: register and log in a user, returns (user JSON, auth headers)."""
    email = email or f"{first_name}.{last_name}@example.com".lower()
    resp = client.post("/users/register", json={
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    login = client.post("/users/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    return resp.json(), {"Authorization": f"Bearer {login.json()['accessToken']}"}


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Sunday kickabout",
        "category": "Football",
        "description": "Five a side, bring a ball",
        "date": "2024-03-17T10:00:00",
        "location": "Parco Sempione, Milano",
        "minPlayers": 6,
        "maxPlayers": 10,
    }
    payload.update(overrides)
    return payload


def create_test_event(client: TestClient, headers: dict, **overrides) -> dict:
    """Helper: POST /events and return response JSON."""
    resp = client.post("/events/", json=event_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def make_user(db, first_name: str = "Ada", last_name: str = "Lovelace") -> User:
    """Helper: insert a user directly through the session."""
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name}.{last_name}@example.com".lower(),
        password_hash=hash_password("secret123"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event(db, creator: User, **overrides) -> Event:
    """Helper: insert an event directly through the session."""
    fields = {
        "title": "Evening padel",
        "category": Category.padel,
        "description": "Doubles",
        "date": datetime(2024, 3, 15, 19, 0),
        "location": "Padel Club",
        "created_by": creator.user_id,
        "created_by_name": creator.full_name,
    }
    fields.update(overrides)
    event = Event(**fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event
