from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from authflow.application.use_cases.users.sign_in import SignInUseCase
from authflow.application.use_cases.users.sign_up import SignUpUseCase
from authflow.domain.users.entities import SessionToken, User
from authflow.domain.users.exceptions import (
    InvalidPasswordError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from authflow.interfaces.http.controllers.auth_controller import AuthController
from authflow.shared.middleware.error_handler import configure_error_handling


def _user(email: str = "e@q.com") -> User:
    now = datetime.now(UTC)
    return User(
        id=1,
        name="aa",
        email=email,
        password_hash="pbkdf2:sha256$hash",
        created_at=now,
        updated_at=now,
    )


def _token(user_id: int = 1) -> SessionToken:
    now = datetime.now(UTC)
    return SessionToken(
        user_id=user_id, token="token123", issued_at=now, expires_at=now + timedelta(days=1)
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**overrides) -> AuthController:
    kwargs = {
        "sign_up_use_case": MagicMock(),
        "sign_in_use_case": MagicMock(),
        "sign_out_use_case": MagicMock(),
        "authenticate_use_case": MagicMock(),
    }
    kwargs.update(overrides)
    return AuthController(**kwargs)


def test_sign_up_returns_created_payload(flask_app: Flask) -> None:
    called: dict[str, tuple[str, str, str]] = {}

    class StubSignUp:
        def execute(self, name: str, email: str, password: str) -> tuple[User, SessionToken]:
            called["args"] = (name, email, password)
            return _user(email), _token()

    controller = _controller(sign_up_use_case=cast(SignUpUseCase, StubSignUp()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"name": "aa", "email": "E@Q.com", "password": "secret"},
        )

    assert response.status_code == 201
    assert called["args"] == ("aa", "e@q.com", "secret")
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["message"] == "User created successfully"
    assert payload["data"]["token"] == "token123"
    user = payload["data"]["user"]
    assert user["email"] == "e@q.com"
    assert set(user) == {"id", "name", "email", "createdAt", "updatedAt"}


@pytest.mark.parametrize(
    ("body", "field"),
    [
        ({"name": "aa", "password": "secret"}, "email"),
        ({"name": "aa", "email": "not-an-email", "password": "secret"}, "email"),
        ({"name": "aa", "email": "e@q.com", "password": "short"}, "password"),
        ({"name": "a", "email": "e@q.com", "password": "secret"}, "name"),
    ],
)
def test_sign_up_invalid_payload_returns_422(flask_app: Flask, body: dict, field: str) -> None:
    controller = _controller()
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/v1/auth/sign-up", json=body)

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"] == "validation_error"
    assert field in payload["context"]["fields"]


def test_sign_up_conflict_returns_409(flask_app: Flask) -> None:
    sign_up = MagicMock()
    sign_up.execute.side_effect = UserAlreadyExistsError()
    flask_app.register_blueprint(_controller(sign_up_use_case=sign_up).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"name": "aa", "email": "e@q.com", "password": "secret"},
        )

    assert response.status_code == 409
    assert response.get_json() == {
        "success": False,
        "error": "user_already_exists",
        "message": "User already exists",
    }


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (UserNotFoundError(), 404, "user_not_found"),
        (InvalidPasswordError(), 401, "invalid_password"),
    ],
)
def test_sign_in_domain_errors(flask_app: Flask, error: Exception, status: int, code: str) -> None:
    sign_in = MagicMock()
    sign_in.execute.side_effect = error
    flask_app.register_blueprint(_controller(sign_in_use_case=sign_in).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/v1/auth/sign-in", json={"email": "e@q.com", "password": "secret"}
        )

    assert response.status_code == status
    assert response.get_json()["error"] == code


def test_sign_in_returns_token(flask_app: Flask) -> None:
    sign_in = MagicMock()
    sign_in.execute.return_value = (_user(), _token())
    controller = _controller(sign_in_use_case=cast(SignInUseCase, sign_in))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/v1/auth/sign-in", json={"email": "e@q.com", "password": "secret"}
        )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["message"] == "User signed in successfully"
    assert payload["data"]["token"] == "token123"
    assert "password" not in payload["data"]["user"]
    sign_in.execute.assert_called_once_with("e@q.com", "secret")


def test_sign_out_returns_ok(flask_app: Flask) -> None:
    sign_out = MagicMock()
    flask_app.register_blueprint(_controller(sign_out_use_case=sign_out).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/v1/auth/sign-out")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "User signed out successfully"}
    sign_out.execute.assert_called_once_with()


def test_me_requires_bearer_token(flask_app: Flask) -> None:
    authenticate = MagicMock()
    flask_app.register_blueprint(_controller(authenticate_use_case=authenticate).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.get_json()["error"] == "authentication_required"
    authenticate.execute.assert_not_called()


def test_unexpected_error_is_hidden(flask_app: Flask) -> None:
    sign_in = MagicMock()
    sign_in.execute.side_effect = RuntimeError("database exploded")
    flask_app.register_blueprint(_controller(sign_in_use_case=sign_in).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/v1/auth/sign-in", json={"email": "e@q.com", "password": "secret"}
        )

    assert response.status_code == 500
    assert response.get_json()["error"] == "internal_error"
    assert "exploded" not in response.get_data(as_text=True)
