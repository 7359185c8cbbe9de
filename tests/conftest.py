"""Shared pytest fixtures.

Fixture overview
----------------
engine        in-memory SQLite engine with all tables created
db_session    plain SQLAlchemy session on that engine (service tests)
client        TestClient on the app with get_db pointed at ``engine``
api_client    same app, but base_url already at /api/v1 (client-side tests)
make_user     registers + logs in a user, returns an ``AuthedUser``
"""

from __future__ import annotations

import os

# Settings are read at import time; keep the suite off the real database.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-bytes!")

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projector.api.deps import get_db
from projector.db.init_db import init_db
from projector.main import app
from projector.models.base import Base

API_PREFIX = "/api/v1"


@dataclass
class AuthedUser:
    id: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


# ── Database ────────────────────────────────────────────────────────────────


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


# ── HTTP clients ────────────────────────────────────────────────────────────


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def api_client(client):
    """TestClient is an httpx.Client, so the client package can use it as-is."""
    return TestClient(app, base_url=f"http://testserver{API_PREFIX}")


@pytest.fixture
def make_user(client):
    def _make_user(email: str, password: str = "correct-horse") -> AuthedUser:
        resp = client.post(
            f"{API_PREFIX}/auth/register", json={"email": email, "password": password}
        )
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["id"]

        resp = client.post(
            f"{API_PREFIX}/auth/login", json={"email": email, "password": password}
        )
        assert resp.status_code == 200, resp.text
        return AuthedUser(user_id, email, password, resp.json()["access_token"])

    return _make_user


@pytest.fixture
def alice(make_user) -> AuthedUser:
    return make_user("alice@projector.dev")


@pytest.fixture
def bob(make_user) -> AuthedUser:
    return make_user("bob@projector.dev")
