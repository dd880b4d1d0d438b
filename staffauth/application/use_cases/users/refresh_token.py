# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.domain.users.entities import TokenPair
from staffauth.domain.users.exceptions import SessionNotFoundError
from staffauth.domain.users.repositories import SessionRepository, TokenIssuer
from staffauth.shared.logging import logger


class RefreshTokenUseCase:
    def __init__(self, *, sessions: SessionRepository, tokens: TokenIssuer) -> None:
        self._sessions = sessions
        self._tokens = tokens

    def execute(self, session_id: int) -> TokenPair:
        session = self._sessions.find_by_id(session_id)
        if session is None:
            logger.warning(f"auth.refresh: unknown session session_id={session_id}")
            raise SessionNotFoundError(session_id)

        tokens = self._tokens.issue(session.user_id, session.id)
        logger.info(f"auth.refresh: ok user_id={session.user_id} session_id={session.id}")
        return tokens
