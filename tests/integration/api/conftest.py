"""Fixtures for HTTP-level tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from taskboard.api import Settings, create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret="test-secret",
        database_path=":memory:",
        password_iterations=1_000,
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Client with the lifespan running, so the database is connected."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def register(client: TestClient, username: str) -> dict:
    response = client.post(
        "/api/users/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "password",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login(client: TestClient, username: str) -> dict[str, str]:
    response = client.post(
        "/api/users/login",
        json={"email": f"{username}@example.com", "password": "password"},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture(name="register")
def register_fixture():
    """Register a user over HTTP and return its JSON body."""
    return register


@pytest.fixture(name="login")
def login_fixture():
    """Log a user in over HTTP and return bearer headers."""
    return login
