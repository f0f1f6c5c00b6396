import os
import uuid

import pytest

# Deterministic auth settings for every test run
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PYTEST_RUNNING"] = "1"

from fastapi.testclient import TestClient

from expensync.api.main import app
from expensync.db import models
from expensync.db.database import SessionLocal, engine
from expensync.utils.settings import refresh_settings_cache

API = "/api/v1"


@pytest.fixture(scope="session", autouse=True)
def _schema():
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


# Each test starts from empty tables
@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(autouse=True)
def _fresh_settings():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


def signup(client, *, name="Test User", email=None, password="secret123"):
    email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
    r = client.post(f"{API}/auth/signup", json={"name": name, "email": email, "password": password})
    assert r.status_code == 201, r.text
    return email, password


def login(client, email, password):
    r = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def make_user(client):
    """Sign up and log in a fresh user; returns the login body plus `headers`."""

    def _make(**kwargs):
        email, password = signup(client, **kwargs)
        body = login(client, email, password)
        body["headers"] = auth_headers(body["accessToken"])
        body["email"] = email
        body["password"] = password
        return body

    return _make


@pytest.fixture
def user(make_user):
    return make_user()
