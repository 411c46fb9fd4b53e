from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from authflow.domain.users.entities import SessionToken, User, normalize_email

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _validate_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Please provide a valid email address",
            {"pattern": EMAIL_PATTERN.pattern},
        )
    return value


class SignUpRequestDTO(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_email(value)
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _validate_email(value)


class SignInRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)  # No length policy on sign-in

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_email(value)
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _validate_email(value)


class UserDTO(BaseModel):
    """Public view of a user; the password hash is never serialised."""

    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthDataDTO(BaseModel):
    token: str
    user: UserDTO


class AuthSuccessDTO(BaseModel):
    success: bool = True
    message: str
    data: AuthDataDTO

    @classmethod
    def build(cls, message: str, user: User, token: SessionToken) -> AuthSuccessDTO:
        return cls(
            message=message,
            data=AuthDataDTO(token=token.token, user=UserDTO.from_entity(user)),
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MessageDTO(BaseModel):
    success: bool = True
    message: str
