"""Shared fixtures: in-memory database, faked Places provider, captured mail."""
import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["OTP_BACKEND"] = "memory"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["GOOGLE_PLACES_API_KEY"] = "test-places-key"
os.environ.pop("SMTP_HOST", None)

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from globetrotter.core.database import Base, get_db
from globetrotter.dependencies.otp import get_otp_store
from globetrotter.main import app
from globetrotter.models.catalog.activity import Activity
from globetrotter.models.catalog.city import City
from globetrotter.services.auth.otp_store import InMemoryOtpStore
from globetrotter.services.email_service import get_email_sender
from globetrotter.services.places.places_client import PlacesClient, get_places_client

BASE_URL = "http://test/api"
PASSWORD = "correct-horse"


class FakePlaces:
    """Serves canned provider payloads keyed by endpoint name."""

    def __init__(self):
        self.responses = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 2)[-2]
        payload = self.responses.get(endpoint, {"status": "ZERO_RESULTS", "results": []})
        if isinstance(payload, httpx.Response):
            return payload
        if isinstance(payload, Exception):
            raise payload
        return httpx.Response(200, json=payload)

    def client(self) -> PlacesClient:
        return PlacesClient("test-places-key", transport=httpx.MockTransport(self.handler))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def otp_store():
    return InMemoryOtpStore()


@pytest.fixture
def outbox():
    return []


@pytest.fixture
def fake_places():
    return FakePlaces()


@pytest.fixture
async def client(session_factory, otp_store, outbox, fake_places):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    async def override_get_places_client():
        places = fake_places.client()
        try:
            yield places
        finally:
            await places.aclose()

    def override_get_email_sender():
        def send(to_email, subject, body):
            outbox.append({"to": to_email, "subject": subject, "body": body})
        return send

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_otp_store] = lambda: otp_store
    app.dependency_overrides[get_email_sender] = override_get_email_sender
    app.dependency_overrides[get_places_client] = override_get_places_client

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Sign up and log in a user; returns (user, auth headers)."""
    async def _register(email="ana@example.com", password=PASSWORD, name="Ana"):
        resp = await client.post(
            "/users/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text

        resp = await client.post("/users/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
async def owner(register):
    return await register()


@pytest.fixture
async def catalog(session_factory):
    """Two cities and one catalog activity in Paris."""
    async with session_factory() as db:
        paris = City(name="Paris", country="France", cost_index=4, popularity_score=4.8)
        rome = City(name="Rome", country="Italy", cost_index=3, popularity_score=4.6)
        db.add_all([paris, rome])
        await db.commit()

        louvre = Activity(city_id=paris.id, name="Louvre", type="museum", avg_cost=22, duration_hours=3)
        db.add(louvre)
        await db.commit()

        return {"paris": paris.id, "rome": rome.id, "louvre": louvre.id}


@pytest.fixture
def create_trip(client, owner):
    async def _create(headers=None, **fields):
        body = {"title": "Summer in Europe", **fields}
        resp = await client.post("/trips", json=body, headers=headers or owner[1])
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
