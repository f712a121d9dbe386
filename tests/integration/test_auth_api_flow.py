"""
End-to-end tests of the credential lifecycle through the HTTP API.

Real flows, hashing and JWT signing; in-memory stores stand in for Redis
and PostgreSQL so no services are needed.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_registration_flow, get_reset_flow, get_session_flow
from src.api.errors import register_error_handlers
from src.api.v1.routes import router


@pytest.fixture
def client(registration, reset, session) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router, prefix="/v1")
    app.dependency_overrides[get_registration_flow] = lambda: registration
    app.dependency_overrides[get_reset_flow] = lambda: reset
    app.dependency_overrides[get_session_flow] = lambda: session
    return TestClient(app)


def register(client: TestClient, sent_code, email="bob@example.com", login="bobby") -> dict:
    response = client.post(
        "/v1/auth/registration",
        json={"name": "Bob", "email": email, "login": login, "password": "Secret1"},
    )
    assert response.status_code == 201
    response = client.post("/v1/auth/registration-code", json={"email": email, "code": sent_code()})
    assert response.status_code == 201
    return response.json()["user"]


class TestRegistrationLifecycle:
    def test_register_then_use_session_token(self, client, sent_code) -> None:
        user = register(client, sent_code)

        response = client.post(
            "/v1/auth/check-token", headers={"Authorization": f"Bearer {user['token']}"}
        )

        assert response.status_code == 200

    def test_code_replay_rejected(self, client, sent_code, users) -> None:
        register(client, sent_code)

        response = client.post(
            "/v1/auth/registration-code", json={"email": "bob@example.com", "code": sent_code()}
        )

        assert response.status_code == 400
        assert response.json()["status"] is False
        assert len(users.accounts) == 1

    def test_existing_login_conflicts_before_code(self, client, sent_code, notifier) -> None:
        register(client, sent_code)
        notifier.reset_mock()

        response = client.post(
            "/v1/auth/registration",
            json={"name": "Other", "email": "other@example.com", "login": "bobby", "password": "Secret1"},
        )

        assert response.status_code == 409
        notifier.send.assert_not_called()


class TestPasswordLifecycle:
    def test_change_password_then_login(self, client, sent_code) -> None:
        user = register(client, sent_code)
        auth = {"Authorization": f"Bearer {user['token']}"}

        response = client.put(
            "/v1/auth/change-password",
            json={"oldPassword": "Secret1", "newPassword": "Changed1"},
            headers=auth,
        )
        assert response.status_code == 200

        assert client.post("/v1/auth/login", json={"loginOrEmail": "bobby", "password": "Changed1"}).status_code == 200
        assert client.post("/v1/auth/login", json={"loginOrEmail": "bobby", "password": "Secret1"}).status_code == 400

    def test_reset_scenario(self, client, sent_code) -> None:
        register(client, sent_code)

        assert client.post("/v1/auth/request-reset-password", json={"email": "bob@example.com"}).status_code == 200
        response = client.post(
            "/v1/auth/verify-reset-code", json={"email": "bob@example.com", "code": sent_code()}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        first = client.post("/v1/auth/reset-password", json={"token": token, "newPassword": "NewPass1"})
        second = client.post("/v1/auth/reset-password", json={"token": token, "newPassword": "AnotherPass2"})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json() == {"status": False, "message": "Invalid or expired token"}
        login = client.post("/v1/auth/login", json={"loginOrEmail": "bob@example.com", "password": "NewPass1"})
        assert login.status_code == 200

    def test_reset_token_is_not_a_session(self, client, sent_code) -> None:
        register(client, sent_code)
        client.post("/v1/auth/request-reset-password", json={"email": "bob@example.com"})
        token = client.post(
            "/v1/auth/verify-reset-code", json={"email": "bob@example.com", "code": sent_code()}
        ).json()["token"]

        response = client.post("/v1/auth/check-token", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
