# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import NewUser, SessionToken, TokenClaims, User
from .users.exceptions import (
    AuthenticationRequiredError,
    InvalidPasswordError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "AuthenticationRequiredError",
    "InvalidPasswordError",
    "InvalidTokenError",
    "NewUser",
    "SessionToken",
    "TokenClaims",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
