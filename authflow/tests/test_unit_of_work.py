from __future__ import annotations

from datetime import UTC
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from authflow.domain.users.entities import NewUser
from authflow.domain.users.exceptions import UserAlreadyExistsError
from authflow.infrastructure.db import build_engine, build_session_factory, init_db
from authflow.infrastructure.db.models import User
from authflow.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserReader,
)
from authflow.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from authflow.shared.config import DatabaseConfig


@pytest.fixture()
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    engine = build_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'uow.db'}"))
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


def _count(factory: sessionmaker[Session]) -> int:
    with factory() as session:
        return session.scalar(select(func.count()).select_from(User))


def _new_user(email: str = "e@q.com") -> NewUser:
    return NewUser(name="aa", email=email, password_hash="hash")


def test_commit_on_clean_exit(session_factory: sessionmaker[Session]) -> None:
    with SqlAlchemyUnitOfWork(session_factory) as uow:
        created = uow.users.add(_new_user())

    assert created.id > 0
    assert created.created_at.tzinfo is UTC
    assert _count(session_factory) == 1


def test_rollback_on_exception(session_factory: sessionmaker[Session]) -> None:
    with pytest.raises(RuntimeError):
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.users.add(_new_user())
            raise RuntimeError("boom")

    assert _count(session_factory) == 0


def test_session_released_after_exit(session_factory: sessionmaker[Session]) -> None:
    uow = SqlAlchemyUnitOfWork(session_factory)
    with uow:
        assert uow.session is not None

    with pytest.raises(RuntimeError):
        _ = uow.session
    with pytest.raises(RuntimeError):
        _ = uow.users


def test_unique_email_enforced_by_store(session_factory: sessionmaker[Session]) -> None:
    with SqlAlchemyUnitOfWork(session_factory) as uow:
        uow.users.add(_new_user())

    with pytest.raises(UserAlreadyExistsError):
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.users.add(_new_user())

    assert _count(session_factory) == 1


def test_reader_lookups(session_factory: sessionmaker[Session]) -> None:
    with SqlAlchemyUnitOfWork(session_factory) as uow:
        created = uow.users.add(_new_user())
    reader = SqlAlchemyUserReader(session_factory)

    assert reader.find_by_email("e@q.com") == created
    assert reader.find_by_id(created.id) == created
    assert reader.find_by_email("missing@q.com") is None
    assert reader.find_by_id(created.id + 1) is None
