# backend/tests/routes/test_session_routes.py
"""
Tests for signup, login, session restore and logout.
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spotbnb.models.user import User

SIGNUP = {
    "firstName": "Demo",
    "lastName": "Lition",
    "email": "demo@example.com",
    "username": "Demo-lition",
    "password": "password",
}


class TestSignup:
    def test_signup_creates_user_and_session(self, client: TestClient, db: Session):
        response = client.post("/api/users", json=SIGNUP)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["firstName"] == "Demo"
        assert user["email"] == "demo@example.com"
        assert "hashedPassword" not in user
        assert "token=" in response.headers["set-cookie"]
        assert db.query(User).filter(User.username == "Demo-lition").count() == 1

        restored = client.get("/api/session")
        assert restored.json()["user"]["id"] == user["id"]

    def test_signup_validation_errors(self, client: TestClient):
        response = client.post("/api/users", json={"email": "bad", "username": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Bad Request"
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"] == {
            "firstName": "First Name is required",
            "lastName": "Last Name is required",
            "email": "Please provide a valid email.",
            "username": "Please provide a username with at least 4 characters.",
            "password": "Password must be 6 characters or more.",
        }

    def test_duplicate_email_is_conflict(self, client: TestClient, guest: User):
        response = client.post("/api/users", json={**SIGNUP, "email": guest.email})

        assert response.status_code == 409
        body = response.json()
        assert body["message"] == "User already exists"
        assert body["errors"] == {"email": "User with that email already exists"}


class TestLogin:
    def test_login_with_username(self, client: TestClient, guest: User, test_password: str):
        response = client.post("/api/session", json={"credential": guest.username, "password": test_password})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == guest.id
        assert "token=" in response.headers["set-cookie"]

    def test_login_with_wrong_password(self, client: TestClient, guest: User):
        response = client.post("/api/session", json={"credential": guest.email, "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json() == {
            "message": "Invalid credentials",
            "code": "INVALID_CREDENTIALS",
            "errors": {"credential": "The provided credentials were invalid."},
        }

    def test_login_requires_both_fields(self, client: TestClient):
        response = client.post("/api/session", json={})

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "credential": "Email or username is required",
            "password": "Password is required",
        }


class TestSession:
    def test_anonymous_session_is_null(self, client: TestClient):
        response = client.get("/api/session")

        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_bearer_token_restores_session(self, client: TestClient, guest: User, guest_headers):
        response = client.get("/api/session", headers=guest_headers)

        assert response.json()["user"]["username"] == guest.username

    def test_logout_clears_cookie(self, client: TestClient):
        response = client.delete("/api/session")

        assert response.status_code == 200
        assert response.json() == {"message": "success"}
        assert "token=" in response.headers["set-cookie"]

    def test_protected_route_requires_auth(self, client: TestClient):
        response = client.get("/api/bookings/current")

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required", "code": "UNAUTHORIZED"}

    def test_garbage_token_is_rejected(self, client: TestClient):
        response = client.get("/api/spots/current", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
