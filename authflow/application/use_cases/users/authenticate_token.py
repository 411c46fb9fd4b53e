# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authflow.domain.users.entities import User
from authflow.domain.users.exceptions import InvalidTokenError
from authflow.domain.users.repositories import TokenSigner, UserReader
from authflow.shared.logging import logger


class AuthenticateTokenUseCase:
    """Resolve a bearer token to the user it was issued for."""

    def __init__(self, *, users: UserReader, tokens: TokenSigner) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str) -> User:
        claims = self._tokens.verify(token)
        user = self._users.find_by_id(claims.user_id)
        if user is None:
            logger.warning(f"auth.token: user_id={claims.user_id} no longer exists")
            raise InvalidTokenError()
        return user
