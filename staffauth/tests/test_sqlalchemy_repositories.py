from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from staffauth.domain.users.entities import NewUser, User, UserRole, UserStatus
from staffauth.domain.users.exceptions import UserAlreadyExistsError
from staffauth.infrastructure.db import Base, init_db
from staffauth.infrastructure.db import models
from staffauth.infrastructure.repositories.users.sqlalchemy_reset_password_repository import (
    SqlAlchemyResetPasswordRepository,
)
from staffauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
    _conflicting_field,
)
from staffauth.tests.doubles import DeterministicHasher


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def user_repo(session_factory: sessionmaker) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session_factory, DeterministicHasher())


@pytest.fixture()
def session_repo(session_factory: sessionmaker) -> SqlAlchemySessionRepository:
    return SqlAlchemySessionRepository(session_factory)


@pytest.fixture()
def reset_repo(session_factory: sessionmaker) -> SqlAlchemyResetPasswordRepository:
    return SqlAlchemyResetPasswordRepository(session_factory)


@pytest.fixture()
def carol(user_repo: SqlAlchemyUserRepository) -> User:
    return user_repo.create(
        NewUser(
            username="carol",
            email="Carol@Example.com",
            password="secret123",
            role=UserRole.MANAGER,
            full_name="Carol King",
            hash="a" * 64,
        )
    )


def _stored_password(session_factory: sessionmaker, user_id: int) -> str | None:
    with session_factory() as session:
        return session.execute(
            select(models.User.password).where(models.User.id == user_id)
        ).scalar_one()


def test_create_hashes_password_and_applies_defaults(
    carol: User, session_factory: sessionmaker
) -> None:
    assert carol.id is not None
    assert carol.email == "carol@example.com"
    assert carol.status is UserStatus.INACTIVE
    assert carol.role is UserRole.MANAGER
    assert carol.created_at is not None
    assert _stored_password(session_factory, carol.id) == "hashed:secret123"


def test_find_by_email_is_case_insensitive(
    user_repo: SqlAlchemyUserRepository, carol: User
) -> None:
    found = user_repo.find_by_email("CAROL@example.COM")

    assert found is not None and found.id == carol.id
    assert user_repo.find_by_email("nobody@example.com") is None
    assert user_repo.find_by_id(carol.id) is not None
    assert user_repo.find_by_id(carol.id + 100) is None


@pytest.mark.parametrize(
    ("username", "email", "field"),
    [
        ("carol", "other@example.com", "username"),
        ("caroline", "carol@example.com", "email"),
    ],
)
def test_create_duplicate_raises_conflict(
    user_repo: SqlAlchemyUserRepository, carol: User, username: str, email: str, field: str
) -> None:
    with pytest.raises(UserAlreadyExistsError) as exc_info:
        user_repo.create(
            NewUser(username=username, email=email, password="secret123", role=UserRole.STAFF)
        )

    assert exc_info.value.context == {"field": field}


class _PgDiag:
    constraint_name = "uq_users_email"


class _PgUniqueViolation(Exception):
    diag = _PgDiag()


@pytest.mark.parametrize(
    ("orig", "field"),
    [
        (_PgUniqueViolation("duplicate key value violates unique constraint"), "email"),
        (Exception("Duplicate entry 'carol' for key 'users.uq_users_username'"), "username"),
        (Exception("UNIQUE constraint failed: users.email"), "email"),
        (Exception('duplicate key value violates unique constraint "uq_teams_email"'), None),
    ],
)
def test_conflicting_field_uses_constraint_name(orig: Exception, field: str | None) -> None:
    exc = IntegrityError("INSERT INTO users ...", {}, orig)

    assert _conflicting_field(exc) == field


def test_users_table_names_its_unique_constraints() -> None:
    names = {constraint.name for constraint in models.User.__table__.constraints}

    assert {"uq_users_username", "uq_users_email"} <= names


def test_save_hashes_only_changed_password(
    user_repo: SqlAlchemyUserRepository, carol: User, session_factory: sessionmaker
) -> None:
    loaded = user_repo.find_by_id(carol.id)
    assert loaded is not None

    loaded.full_name = "Carol Q. King"
    user_repo.save(loaded)
    assert _stored_password(session_factory, carol.id) == "hashed:secret123"

    loaded.set_password("newpass1")
    user_repo.save(loaded)
    assert _stored_password(session_factory, carol.id) == "hashed:newpass1"

    # A second save of the same instance must not hash the hash again.
    user_repo.save(loaded)
    assert _stored_password(session_factory, carol.id) == "hashed:newpass1"
    reloaded = user_repo.find_by_id(carol.id)
    assert reloaded is not None and reloaded.full_name == "Carol Q. King"


def test_failed_save_keeps_plain_password_for_retry(
    user_repo: SqlAlchemyUserRepository, carol: User, session_factory: sessionmaker
) -> None:
    user_repo.create(
        NewUser(username="dave", email="dave@example.com", password="x" * 8, role=UserRole.STAFF)
    )
    loaded = user_repo.find_by_id(carol.id)
    assert loaded is not None

    loaded.set_password("newpass1")
    loaded.email = "dave@example.com"
    with pytest.raises(UserAlreadyExistsError) as exc_info:
        user_repo.save(loaded)

    assert exc_info.value.context == {"field": "email"}
    assert loaded.password == "newpass1"
    assert loaded.password_changed() is True
    assert _stored_password(session_factory, carol.id) == "hashed:secret123"

    loaded.email = "carol@example.com"
    user_repo.save(loaded)

    assert _stored_password(session_factory, carol.id) == "hashed:newpass1"
    assert loaded.password == "hashed:newpass1"
    assert loaded.password_changed() is False


def test_session_lifecycle(
    session_repo: SqlAlchemySessionRepository, carol: User
) -> None:
    session = session_repo.create(carol)

    found = session_repo.find_by_id(session.id)
    assert found is not None and found.user_id == carol.id and not found.is_deleted

    session_repo.soft_delete(session.id)
    session_repo.soft_delete(session.id)

    assert session_repo.find_by_id(session.id) is None


def test_soft_delete_for_user_only_touches_that_user(
    session_repo: SqlAlchemySessionRepository,
    user_repo: SqlAlchemyUserRepository,
    carol: User,
) -> None:
    dave = user_repo.create(
        NewUser(username="dave", email="dave@example.com", password="x" * 8, role=UserRole.STAFF)
    )
    first = session_repo.create(carol)
    second = session_repo.create(carol)
    other = session_repo.create(dave)

    session_repo.soft_delete_for_user(carol.id)

    assert session_repo.find_by_id(first.id) is None
    assert session_repo.find_by_id(second.id) is None
    assert session_repo.find_by_id(other.id) is not None


def test_reset_request_lifecycle(
    reset_repo: SqlAlchemyResetPasswordRepository, carol: User
) -> None:
    created = reset_repo.create("b" * 64, carol)

    found = reset_repo.find_by_hash("b" * 64)
    assert found is not None
    assert found.id == created.id
    assert found.user.id == carol.id
    assert found.user.password_changed() is False

    reset_repo.soft_delete(created.id)
    reset_repo.soft_delete(created.id)

    assert reset_repo.find_by_hash("b" * 64) is None
    assert reset_repo.find_by_hash("") is None


def test_reset_requests_for_same_user_are_independent(
    reset_repo: SqlAlchemyResetPasswordRepository, carol: User
) -> None:
    first = reset_repo.create("c" * 64, carol)
    reset_repo.create("d" * 64, carol)

    reset_repo.soft_delete(first.id)

    assert reset_repo.find_by_hash("c" * 64) is None
    assert reset_repo.find_by_hash("d" * 64) is not None
