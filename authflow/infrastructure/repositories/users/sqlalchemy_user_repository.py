# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from authflow.domain.users.entities import NewUser
from authflow.domain.users.entities import User as DomainUser
from authflow.domain.users.exceptions import UserAlreadyExistsError
from authflow.domain.users.repositories import UserReader, UserRepository
from authflow.infrastructure.db.models import User
from authflow.infrastructure.db.session import session_scope
from authflow.shared.logging import logger


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    """User store bound to a session owned by a unit of work."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_email(self, email: str) -> DomainUser | None:
        row = self._session.scalars(select(User).where(User.email == email)).first()
        return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        row = self._session.get(User, user_id)
        return _to_domain(row) if row else None

    def add(self, user: NewUser) -> DomainUser:
        row = User(name=user.name, email=user.email, password_hash=user.password_hash)
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            logger.warning("users.add: unique constraint rejected insert")
            raise UserAlreadyExistsError() from exc
        self._session.refresh(row)
        return _to_domain(row)


class SqlAlchemyUserReader(UserReader):
    """Read-only lookups, one short-lived session per call."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            return SqlAlchemyUserRepository(session).find_by_email(email)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            return SqlAlchemyUserRepository(session).find_by_id(user_id)
