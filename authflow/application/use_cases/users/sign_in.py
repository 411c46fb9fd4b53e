# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authflow.domain.users.entities import SessionToken, User, normalize_email
from authflow.domain.users.exceptions import InvalidPasswordError, UserNotFoundError
from authflow.domain.users.repositories import PasswordHasher, TokenSigner, UserReader
from authflow.shared.logging import logger


class SignInUseCase:
    def __init__(
        self,
        *,
        users: UserReader,
        tokens: TokenSigner,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> tuple[User, SessionToken]:
        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            logger.info("auth.sign_in: unknown email")
            raise UserNotFoundError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.sign_in: wrong password for user_id={user.id}")
            raise InvalidPasswordError()

        token = self._tokens.sign(user.id)
        logger.info(f"auth.sign_in: ok user_id={user.id}")
        return user, token
