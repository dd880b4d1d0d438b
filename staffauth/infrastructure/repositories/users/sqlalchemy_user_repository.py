# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError

from staffauth.domain.users.entities import NewUser
from staffauth.domain.users.entities import Session as DomainSession
from staffauth.domain.users.entities import User as DomainUser
from staffauth.domain.users.exceptions import UserAlreadyExistsError
from staffauth.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from staffauth.infrastructure.db.models import User, UserSession
from staffauth.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from staffauth.shared.logging import logger


def user_to_domain(row: User) -> DomainUser:
    user = DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password=row.password,
        status=row.status,
        role=row.role,
        full_name=row.full_name,
        phone_number=row.phone_number,
        salary=row.salary,
        hash=row.hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
    user.snapshot_password()
    return user


# Constraint names come from infrastructure/db/models.py. SQLite reports the
# column instead ("UNIQUE constraint failed: users.email").
_UNIQUE_FIELDS = {
    "uq_users_username": "username",
    "uq_users_email": "email",
}


def _conflicting_field(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint in _UNIQUE_FIELDS:
        return _UNIQUE_FIELDS[constraint]
    message = str(exc.orig)
    for name, field in _UNIQUE_FIELDS.items():
        if name in message or f"users.{field}" in message:
            return field
    return None


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory, password_hasher: PasswordHasher):
        self._session_factory = session_factory
        self._password_hasher = password_hasher

    def _password_to_store(self, user: DomainUser) -> str | None:
        # Only a password that differs from the loaded snapshot is hashed, so
        # stored hashes are never hashed twice. The entity is left untouched
        # until the write commits.
        if user.password_changed():
            return self._password_hasher.hash(user.password)  # type: ignore[arg-type]
        return user.password

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return user_to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(User)
                .filter(func.lower(User.email) == email.strip().lower())
                .first()
            )
            return user_to_domain(row) if row else None

    def create(self, new_user: NewUser) -> DomainUser:
        password = self._password_hasher.hash(new_user.password) if new_user.password else None
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=new_user.username,
                    email=new_user.email.strip().lower() if new_user.email else None,
                    password=password,
                    full_name=new_user.full_name,
                    status=new_user.status,
                    role=new_user.role,
                    hash=new_user.hash,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                created = user_to_domain(row)
        except IntegrityError as exc:
            field = _conflicting_field(exc)
            logger.info(f"users.create: conflict on {field or 'unique field'}")
            raise UserAlreadyExistsError(field) from exc
        logger.debug(f"users.create: user_id={created.id}")
        return created

    def save(self, user: DomainUser) -> DomainUser:
        password = self._password_to_store(user)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user.id)
                if row is None:
                    raise LookupError(f"user {user.id} does not exist")
                row.username = user.username
                row.email = user.email
                row.password = password
                row.full_name = user.full_name
                row.phone_number = user.phone_number
                row.salary = user.salary
                row.status = user.status
                row.role = user.role
                row.hash = user.hash
                session.flush()
                user.updated_at = row.updated_at
        except IntegrityError as exc:
            raise UserAlreadyExistsError(_conflicting_field(exc)) from exc
        user.password = password
        user.snapshot_password()
        return user


def _session_to_domain(row: UserSession) -> DomainSession:
    return DomainSession(
        id=row.id,
        user_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        deleted_at=row.deleted_at,
    )


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def create(self, user: DomainUser) -> DomainSession:
        with unit_of_work_scope(self._session_factory) as session:
            row = UserSession(user_id=user.id)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _session_to_domain(row)

    def find_by_id(self, session_id: int) -> DomainSession | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(UserSession)
                .filter(UserSession.id == session_id, UserSession.deleted_at.is_(None))
                .first()
            )
            return _session_to_domain(row) if row else None

    def soft_delete(self, session_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            now = datetime.now(UTC)
            session.execute(
                update(UserSession)
                .where(UserSession.id == session_id, UserSession.deleted_at.is_(None))
                .values(deleted_at=now, updated_at=now)
            )

    def soft_delete_for_user(self, user_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            now = datetime.now(UTC)
            result = session.execute(
                update(UserSession)
                .where(UserSession.user_id == user_id, UserSession.deleted_at.is_(None))
                .values(deleted_at=now, updated_at=now)
            )
            logger.debug(f"sessions.revoke_all: user_id={user_id} count={result.rowcount}")
