# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class NewUser:
    """A user that has not been persisted yet; the store assigns id and timestamps."""

    name: str
    email: str
    password_hash: str


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    issued_at: datetime
    expires_at: datetime


def normalize_email(email: str) -> str:
    return email.strip().lower()
