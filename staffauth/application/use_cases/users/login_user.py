# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.domain.users.entities import LoginResponse
from staffauth.domain.users.exceptions import EmailNotFoundError, IncorrectPasswordError
from staffauth.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    TokenIssuer,
    UserRepository,
)
from staffauth.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> LoginResponse:
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("auth.login: unknown email")
            raise EmailNotFoundError()

        if not self._password_hasher.verify(password, user.password):
            logger.info(f"auth.login: incorrect password user_id={user.id}")
            raise IncorrectPasswordError()

        session = self._sessions.create(user)
        tokens = self._tokens.issue(user.id, session.id)

        logger.info(f"auth.login: ok user_id={user.id} session_id={session.id}")
        return LoginResponse(tokens=tokens, user=user)
