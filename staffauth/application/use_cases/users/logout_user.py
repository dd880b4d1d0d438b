"""Use-case for revoking a refresh-token lineage."""

from __future__ import annotations

from staffauth.domain.users.repositories import SessionRepository
from staffauth.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, session_id: int) -> None:
        self._sessions.soft_delete(session_id)
        logger.info(f"auth.logout: ok session_id={session_id}")
