# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.orm import joinedload

from staffauth.domain.users.entities import ResetPasswordRequest
from staffauth.domain.users.entities import User as DomainUser
from staffauth.domain.users.repositories import ResetPasswordRepository
from staffauth.infrastructure.db.models import ForgotPassword
from staffauth.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope

from .sqlalchemy_user_repository import user_to_domain


class SqlAlchemyResetPasswordRepository(ResetPasswordRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def create(self, hash: str, user: DomainUser) -> ResetPasswordRequest:
        with unit_of_work_scope(self._session_factory) as session:
            row = ForgotPassword(hash=hash, user_id=user.id)
            session.add(row)
            session.flush()
            session.refresh(row)
            return ResetPasswordRequest(
                id=row.id,
                hash=row.hash,
                user=user,
                created_at=row.created_at,
                deleted_at=row.deleted_at,
            )

    def find_by_hash(self, hash: str) -> ResetPasswordRequest | None:
        """Live request for ``hash`` with its user loaded, or None."""
        if not hash:
            return None
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(ForgotPassword)
                .options(joinedload(ForgotPassword.user))
                .filter(ForgotPassword.hash == hash, ForgotPassword.deleted_at.is_(None))
                .first()
            )
            if row is None:
                return None
            return ResetPasswordRequest(
                id=row.id,
                hash=row.hash,
                user=user_to_domain(row.user),
                created_at=row.created_at,
                deleted_at=row.deleted_at,
            )

    def soft_delete(self, request_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(ForgotPassword)
                .where(ForgotPassword.id == request_id, ForgotPassword.deleted_at.is_(None))
                .values(deleted_at=datetime.now(UTC))
            )
