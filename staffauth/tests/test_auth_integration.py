from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from staffauth.app import create_app
from staffauth.container import Container
from staffauth.infrastructure.db import Base, init_db
from staffauth.shared.config import AuthSettings
from staffauth.tests.doubles import RecordingMailSender


@pytest.fixture()
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture()
def app(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    auth_settings: AuthSettings,
    mail_sender: RecordingMailSender,
) -> Iterator[Flask]:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_db(engine)
    container = Container(
        session_factory=sessionmaker(bind=engine, autoflush=False, expire_on_commit=False),
        auth_settings=auth_settings,
        mail_sender=mail_sender,
    )
    yield create_app(container)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _register(client: FlaskClient, email: str = "frank@example.com") -> None:
    response = client.post(
        "/api/v1/auth/email/register",
        json={
            "email": email,
            "username": email.split("@")[0],
            "password": "secret123",
            "fullName": "Frank Lee",
            "role": "Staff",
        },
    )
    assert response.status_code == 204


def _login(client: FlaskClient, password: str = "secret123") -> dict:
    response = client.post(
        "/api/v1/auth/email/login",
        json={"email": "frank@example.com", "password": password},
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()


def test_register_login_me_refresh_logout_flow(
    client: FlaskClient, mail_sender: RecordingMailSender
) -> None:
    _register(client)
    assert len(mail_sender.confirmations) == 1

    login = _login(client)
    assert login["user"]["status"] == "inactive"
    assert login["user"]["role"] == "staff"

    me = client.get("/api/v1/auth/me", headers=_bearer(login["token"]))
    assert me.status_code == 200
    assert me.get_json()["email"] == "frank@example.com"

    refreshed = client.post("/api/v1/auth/refresh", headers=_bearer(login["refreshToken"]))
    assert refreshed.status_code == 200

    logout = client.post("/api/v1/auth/logout", headers=_bearer(login["refreshToken"]))
    assert logout.status_code == 204

    # Every refresh token of the revoked session stops working.
    for token in (login["refreshToken"], refreshed.get_json()["refreshToken"]):
        again = client.post("/api/v1/auth/refresh", headers=_bearer(token))
        assert again.status_code == 401
        assert again.get_json() == {"error": "unauthorized"}


def test_duplicate_registration_conflicts(client: FlaskClient) -> None:
    _register(client)

    response = client.post(
        "/api/v1/auth/email/register",
        json={
            "email": "FRANK@example.com",
            "username": "frank2",
            "password": "secret123",
            "fullName": "Frank Two",
            "role": "staff",
        },
    )

    assert response.status_code == 409


def test_login_errors(client: FlaskClient) -> None:
    _register(client)

    unknown = client.post(
        "/api/v1/auth/email/login", json={"email": "ghost@example.com", "password": "x"}
    )
    wrong = client.post(
        "/api/v1/auth/email/login", json={"email": "frank@example.com", "password": "nope"}
    )

    assert unknown.get_json() == {"status": 422, "errors": {"email": "notFound"}}
    assert wrong.get_json() == {"status": 422, "errors": {"password": "incorrectPassword"}}


def test_forgot_and_reset_password_flow(
    client: FlaskClient, mail_sender: RecordingMailSender
) -> None:
    _register(client)
    first = _login(client)
    second = _login(client)

    unknown = client.post("/api/v1/auth/forgot/password", json={"email": "ghost@example.com"})
    assert unknown.get_json() == {"status": 422, "errors": {"email": "emailNotExists"}}

    forgot = client.post("/api/v1/auth/forgot/password", json={"email": "frank@example.com"})
    assert forgot.status_code == 204
    reset_hash = mail_sender.resets[0].hash

    reset = client.post(
        "/api/v1/auth/reset/password", json={"hash": reset_hash, "password": "newpass1"}
    )
    assert reset.status_code == 204

    replay = client.post(
        "/api/v1/auth/reset/password", json={"hash": reset_hash, "password": "another1"}
    )
    assert replay.get_json() == {"status": 422, "errors": {"hash": "notFound"}}

    for session in (first, second):
        refresh = client.post("/api/v1/auth/refresh", headers=_bearer(session["refreshToken"]))
        assert refresh.status_code == 401

    old = client.post(
        "/api/v1/auth/email/login", json={"email": "frank@example.com", "password": "secret123"}
    )
    assert old.status_code == 422
    assert _login(client, password="newpass1")["user"]["email"] == "frank@example.com"
