"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read once at import time; configure before importing the app
os.environ.setdefault("JWT_SECRET", "test-signing-secret-that-is-long-enough-123")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base
from shared.infrastructure.db import build_engine, get_db
from shared.security.rate_limit import limiter


# SQLite in-memory database shared by every connection of a test
engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Tests log in far more often than the production limits allow
limiter.enabled = False

_email_counter = itertools.count(1)

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def register_account(client, email=None, password=DEFAULT_PASSWORD, **overrides):
    """Register an account through the API and return the response body."""
    if email is None:
        email = f"owner{next(_email_counter)}@test.com"
    payload = {
        "email": email,
        "password": password,
        "firstName": "Test",
        "lastName": "Owner",
        "restaurantName": "Test Bistro",
        **overrides,
    }
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, f"Register failed: {response.json()}"
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def account(client):
    """A freshly registered account on the free plan."""
    return register_account(client)


@pytest.fixture
def auth_headers(account):
    """Get authentication headers for API calls."""
    return bearer(account["token"])


@pytest.fixture
def other_headers(client):
    """Headers of a second, unrelated account."""
    return bearer(register_account(client)["token"])


@pytest.fixture
def upgrade(client):
    """Switch the account behind `headers` to another plan."""
    def _upgrade(headers, plan="basic"):
        response = client.put("/api/subscriptions/plan", json={"plan": plan}, headers=headers)
        assert response.status_code == 200, f"Upgrade failed: {response.json()}"
        return response.json()
    return _upgrade


@pytest.fixture
def make_table(client):
    """Create a table through the API and return it."""
    def _make_table(headers, number, capacity=4, **fields):
        response = client.post(
            "/api/tables",
            json={"tableNumber": number, "capacity": capacity, **fields},
            headers=headers,
        )
        assert response.status_code == 201, f"Create table failed: {response.json()}"
        return response.json()["table"]
    return _make_table


@pytest.fixture
def make_order(client):
    """Create an order through the API and return it."""
    def _make_order(headers, items=None, table_id=None, **fields):
        items = items or [{"id": "I1", "name": "Samosa", "price": 100, "quantity": 2}]
        subtotal = sum(i["price"] * i["quantity"] for i in items)
        payload = {
            "items": items,
            "subtotal": subtotal,
            "tax": 0,
            "total": subtotal,
            **fields,
        }
        if table_id is not None:
            payload["tableId"] = table_id
        response = client.post("/api/orders", json=payload, headers=headers)
        assert response.status_code == 201, f"Create order failed: {response.json()}"
        return response.json()["order"]
    return _make_order
