# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import NewUser, SessionToken, TokenClaims, User


class UserReader(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...


class UserRepository(UserReader, Protocol):
    def add(self, user: NewUser) -> User: ...


class UnitOfWork(Protocol):
    """Transactional scope: commit on clean exit, rollback on exception."""

    @property
    def users(self) -> UserRepository: ...

    def __enter__(self) -> UnitOfWork: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, user_id: int) -> SessionToken: ...
    def verify(self, token: str) -> TokenClaims: ...
