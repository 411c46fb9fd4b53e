# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from authflow.shared.config import DatabaseConfig
from authflow.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    connect_args: dict[str, object] = {}
    pool_args: dict[str, object] = {}
    if config.is_sqlite():
        connect_args = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
    else:
        pool_args = {
            "pool_size": config.pool_size,
            "max_overflow": config.max_overflow,
            "pool_timeout": config.pool_timeout,
        }

    engine = create_engine(
        config.url,
        echo=config.echo,
        pool_pre_ping=True,
        connect_args=connect_args,
        **pool_args,
    )
    logger.debug(f"db.engine: created for dialect={engine.dialect.name}")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    from . import models  # noqa: F401 (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)
    logger.info("db: schema ready")


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Short-lived session for reads; always closed."""
    session = factory()
    logger.debug("db.session: opened scoped session")
    try:
        yield session
    finally:
        session.close()
        logger.debug("db.session: closed scoped session")
