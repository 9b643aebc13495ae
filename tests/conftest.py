import asyncio
import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so the environment goes first
_TMP_DIR = Path(tempfile.mkdtemp(prefix="quiet-hours-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP_DIR / 'app.db'}")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:8081")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SEED_SAMPLE_PLACES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool

from quiet_hours.core.database import Base, create_engine_for, get_db
from quiet_hours.core.photon_client import get_photon_client
from quiet_hours.main import app
from quiet_hours.models.place import Place


# ---------- TEST FIXTURES ----------

class FakePhoton:
    """Stands in for the geocoder; `results` is what the next search returns."""

    def __init__(self):
        self.results = None
        self.calls = []

    async def search(self, query, latitude=None, longitude=None, limit=20):
        self.calls.append({"query": query, "latitude": latitude, "longitude": longitude, "limit": limit})
        return self.results


@pytest.fixture(scope="function")
def engine(tmp_path):
    """A fresh SQLite database file for each test."""
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture(scope="function")
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture(scope="function")
def run_db(session_factory):
    """Run `fn(session)` to completion against the test database."""

    def runner(fn):
        async def wrapper():
            async with session_factory() as session:
                return await fn(session)

        return asyncio.run(wrapper())

    return runner


@pytest.fixture(scope="function")
def photon():
    return FakePhoton()


@pytest.fixture(scope="function")
def client(session_factory, photon):
    """Override get_db and the geocoder dependency for FastAPI TestClient."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photon_client] = lambda: photon
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# ---------- TEST DATA HELPERS ----------

def signup_dict(email="ada@quiethours.io", password="secret123", **overrides):
    data = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": email,
        "password": password,
        "confirmPassword": password,
        "phone": "555-0100",
    }
    data.update(overrides)
    return data


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Sign a user up and return (user, headers)."""

    def _register(email="ada@quiethours.io", **overrides):
        r = client.post("/api/auth/signup", json=signup_dict(email=email, **overrides))
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], auth_headers(body["token"])

    return _register


@pytest.fixture
def add_place(run_db):
    """Insert a place directly and return its id as a string."""

    def _add_place(**fields):
        data = {
            "name": "Quiet Cafe Downtown",
            "address": "123 Main St, City",
            "latitude": 40.7128,
            "longitude": -74.0060,
            "place_type": "Cafe",
            "amenities": "WiFi,Quiet Zone",
            "hourly_rate": 5.00,
        }
        data.update(fields)

        async def insert(session):
            place = Place(**data)
            session.add(place)
            await session.commit()
            return str(place.id)

        return run_db(insert)

    return _add_place
