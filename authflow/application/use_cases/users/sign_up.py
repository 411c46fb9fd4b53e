# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from authflow.domain.users.entities import NewUser, SessionToken, User, normalize_email
from authflow.domain.users.exceptions import UserAlreadyExistsError
from authflow.domain.users.repositories import PasswordHasher, TokenSigner, UnitOfWork
from authflow.shared.logging import logger


class SignUpUseCase:
    """Create a user and issue its first session token in one transaction.

    The existence check, the insert and the token signing all run inside the
    unit of work; if any of them raises, the transaction is rolled back and no
    user row survives.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], UnitOfWork],
        tokens: TokenSigner,
        password_hasher: PasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> tuple[User, SessionToken]:
        email = normalize_email(email)
        with self._uow_factory() as uow:
            if uow.users.find_by_email(email):
                raise UserAlreadyExistsError()
            hashed = self._password_hasher.hash(password)
            user = uow.users.add(NewUser(name=name.strip(), email=email, password_hash=hashed))
            token = self._tokens.sign(user.id)

        logger.info(f"auth.sign_up: created user_id={user.id}")
        return user, token
