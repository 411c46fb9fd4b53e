# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens signed with python-jose."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from authflow.domain.users.entities import SessionToken, TokenClaims
from authflow.domain.users.exceptions import InvalidTokenError
from authflow.domain.users.repositories import TokenSigner
from authflow.shared.config import TokenConfig
from authflow.shared.logging import logger

USER_ID_CLAIM = "userId"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JoseTokenSigner(TokenSigner):
    def __init__(self, config: TokenConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._secret = config.secret
        self._algorithm = config.algorithm
        self._lifetime = timedelta(seconds=config.expires_in)
        self._clock = clock

    def sign(self, user_id: int) -> SessionToken:
        # JWT timestamps have second resolution.
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        claims: dict[str, Any] = {
            USER_ID_CLAIM: user_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return SessionToken(
            user_id=user_id, token=token, issued_at=issued_at, expires_at=expires_at
        )

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True},
            )
        except ExpiredSignatureError as exc:
            logger.info("tokens.verify: expired token")
            raise InvalidTokenError(context={"reason": "expired"}) from exc
        except JWTError as exc:
            logger.info(f"tokens.verify: rejected token ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        user_id = payload.get(USER_ID_CLAIM)
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError()

        return TokenClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
