# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.domain.users.exceptions import ResetHashNotFoundError
from staffauth.domain.users.repositories import (
    ResetPasswordRepository,
    SessionRepository,
    UserRepository,
)
from staffauth.shared.logging import logger


class ResetPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        reset_requests: ResetPasswordRepository,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._reset_requests = reset_requests

    def execute(self, hash: str, password: str) -> None:
        request = self._reset_requests.find_by_hash(hash)
        if request is None:
            logger.info("auth.reset_password: unknown or used hash")
            raise ResetHashNotFoundError()

        user = request.user
        user.set_password(password)

        # Sessions go first so no old refresh token outlives the new password;
        # the ticket is consumed last.
        self._sessions.soft_delete_for_user(user.id)
        self._users.save(user)
        self._reset_requests.soft_delete(request.id)

        logger.info(f"auth.reset_password: ok user_id={user.id} request_id={request.id}")
