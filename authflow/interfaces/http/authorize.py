# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from authflow.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authflow.domain.users.exceptions import AuthenticationRequiredError
from authflow.shared.logging import logger


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        return auth[7:].strip()
    return ""


def authorize(authenticate: AuthenticateTokenUseCase) -> Callable:
    """Require a valid bearer token; the user lands on ``g.current_user``."""

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*args: Any, **kwargs: Any):
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No Authorization header on {request.method} {request.path}"
                )
                raise AuthenticationRequiredError()

            g.current_user = authenticate.execute(token)
            return f(*args, **kwargs)

        return inner

    return decorator


__all__ = ["authorize", "bearer_token"]
