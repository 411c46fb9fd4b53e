# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authflow.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "User already exists"


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "User not found"


class InvalidPasswordError(DomainError):
    code = "invalid_password"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid password"


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired token"


class AuthenticationRequiredError(DomainError):
    code = "authentication_required"
    status = HTTPStatus.UNAUTHORIZED
    message = "Authentication required"
