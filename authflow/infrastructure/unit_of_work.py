# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work implementation."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from authflow.domain.users.repositories import UnitOfWork
from authflow.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authflow.shared.logging import logger


@dataclass
class SqlAlchemyUnitOfWork(AbstractContextManager, UnitOfWork):
    """SQLAlchemy-backed unit of work.

    Entering opens a session and a transaction. Leaving commits when the block
    finished cleanly and rolls back when it raised; the session is closed in
    both cases, exactly once.
    """

    session_factory: Callable[[], Session]

    def __post_init__(self) -> None:
        self._session: Session | None = None
        self._users: SqlAlchemyUserRepository | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("UnitOfWork already entered")
        self._session = self.session_factory()
        self._users = SqlAlchemyUserRepository(self._session)
        logger.debug("uow: session opened")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc:
                logger.warning(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
            else:
                self._session.commit()
                logger.debug("uow: committed")
        except Exception:
            logger.exception("uow: exception while finalising")
            self._session.rollback()
            raise
        finally:
            self._session.close()
            logger.debug("uow: session closed")
            self._session = None
            self._users = None

    @property
    def session(self) -> Session:
        if self._session is None:
            msg = "UnitOfWork session accessed before entering context"
            raise RuntimeError(msg)
        return self._session

    @property
    def users(self) -> SqlAlchemyUserRepository:
        if self._users is None:
            raise RuntimeError("UnitOfWork repositories accessed before entering context")
        return self._users

    def commit(self) -> None:
        if self._session is None:
            raise RuntimeError("UnitOfWork not started")
        self._session.commit()
        logger.debug("uow: manual commit")

    def rollback(self) -> None:
        if self._session is None:
            return
        self._session.rollback()
        logger.debug("uow: manual rollback")
