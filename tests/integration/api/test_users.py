"""HTTP tests for user routes and authentication."""

from datetime import timedelta

from fastapi.testclient import TestClient

from taskboard.core.services.auth import TokenManager


class TestRegistration:
    def test_register_and_login(self, client: TestClient, register, login) -> None:
        user = register(client, "alice")
        headers = login(client, "alice")

        response = client.get("/api/users/profile", headers=headers)

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]
        assert "password" not in response.json()["user"]

    def test_duplicate_email(self, client: TestClient, register, login) -> None:
        register(client, "alice")

        response = client.post(
            "/api/users/register",
            json={"username": "alice2", "email": "alice@example.com", "password": "password"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"

    def test_invalid_payload(self, client: TestClient, register, login) -> None:
        response = client.post(
            "/api/users/register",
            json={"username": "al", "email": "not-an-email", "password": "123"},
        )

        body = response.json()
        assert response.status_code == 400
        assert body["status"] == "error"
        assert body["message"] == "Validation failed"
        fields = {error["field"] for error in body["details"]["errors"]}
        assert {"username", "email", "password"} <= fields

    def test_wrong_password(self, client: TestClient, register, login) -> None:
        register(client, "alice")

        response = client.post(
            "/api/users/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestAuthentication:
    def test_missing_token(self, client: TestClient, register, login) -> None:
        response = client.get("/api/projects")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    def test_invalid_token(self, client: TestClient, register, login) -> None:
        response = client.get("/api/tasks", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client: TestClient, register, login) -> None:
        user = register(client, "alice")
        token = TokenManager("test-secret", expires_in=timedelta(seconds=-5)).issue(user["id"])

        response = client.get(
            "/api/users/profile", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    def test_logout_and_health(self, client: TestClient, register, login) -> None:
        register(client, "alice")
        headers = login(client, "alice")

        assert client.post("/api/users/logout", headers=headers).status_code == 200
        assert client.get("/health").json()["status"] == "healthy"

    def test_cache_stats_require_auth(self, client: TestClient, register, login) -> None:
        assert client.get("/api/cache/stats").status_code == 401

        register(client, "alice")
        response = client.get("/api/cache/stats", headers=login(client, "alice"))

        assert response.status_code == 200
        assert response.json()["config"]["invalidation"] == "complete"
