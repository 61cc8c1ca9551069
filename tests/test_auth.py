"""Tests for GitHub sign-in and bearer-token authentication."""

from fastapi.testclient import TestClient

from src.scribe.core.exceptions import AccessDenied
from src.scribe.core.security import decode_token
from tests.helpers import create_signed_in_user


class TestGitHubSignIn:
    """POST /api/v1/auth/github"""

    def test_sign_in_creates_user(self, client: TestClient, store, github) -> None:
        response = client.post("/api/v1/auth/github", json={"access_token": "gho_abc"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == "octocat"
        assert data["user"]["github_id"] == 42
        assert "access_token" not in data["user"]
        (user,) = store.users.values()
        assert decode_token(data["access_token"])["sub"] == str(user.id)
        assert user.access_token == "gho_abc"
        assert github.tokens == ["gho_abc"]

    def test_sign_in_twice_keeps_one_user(self, client: TestClient, store) -> None:
        client.post("/api/v1/auth/github", json={"access_token": "gho_one"})
        client.post("/api/v1/auth/github", json={"access_token": "gho_two"})

        (user,) = store.users.values()
        assert user.access_token == "gho_two"

    def test_rejected_github_token(self, client: TestClient, store, github) -> None:
        github.error = AccessDenied()

        response = client.post("/api/v1/auth/github", json={"access_token": "gho_bad"})

        assert response.status_code == 401
        assert response.json()["code"] == "authentication_required"
        assert store.users == {}

    def test_empty_token(self, client: TestClient) -> None:
        response = client.post("/api/v1/auth/github", json={"access_token": ""})

        assert response.status_code == 400


class TestMe:
    """GET /api/v1/auth/me"""

    def test_returns_current_user(self, client: TestClient, store) -> None:
        user, headers = create_signed_in_user(store, username="octocat")

        response = client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)
        assert response.json()["username"] == "octocat"

    def test_missing_header(self, client: TestClient) -> None:
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "authentication_required"

    def test_non_bearer_header(self, client: TestClient) -> None:
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_deleted_user(self, client: TestClient, store) -> None:
        user, headers = create_signed_in_user(store)
        del store.users[user.id]

        response = client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == 401
