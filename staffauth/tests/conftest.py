from __future__ import annotations

from datetime import timedelta

import pytest

from staffauth.application.services.tokens import JwtTokenIssuer
from staffauth.domain.users.entities import NewUser, User, UserRole, UserStatus
from staffauth.shared.config import AuthSettings
from staffauth.tests.doubles import (
    ACCESS_SECRET,
    REFRESH_SECRET,
    DeterministicHasher,
    InMemoryResetPasswordRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
    RecordingMailSender,
)


@pytest.fixture()
def auth_settings() -> AuthSettings:
    return AuthSettings(
        secret=ACCESS_SECRET,
        expires=timedelta(minutes=15),
        refresh_secret=REFRESH_SECRET,
        refresh_expires=timedelta(days=3650),
    )


@pytest.fixture()
def token_issuer(auth_settings: AuthSettings) -> JwtTokenIssuer:
    return JwtTokenIssuer(auth_settings)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def users(hasher: DeterministicHasher) -> InMemoryUserRepository:
    return InMemoryUserRepository(hasher)


@pytest.fixture()
def sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture()
def reset_requests(users: InMemoryUserRepository) -> InMemoryResetPasswordRepository:
    return InMemoryResetPasswordRepository(users)


@pytest.fixture()
def mails() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.create(
        NewUser(
            username="alice",
            email="alice@example.com",
            password="secret123",
            role=UserRole.STAFF,
            full_name="Alice Doe",
            status=UserStatus.ACTIVE,
        )
    )
