# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import re
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}

_INSECURE_SECRETS = ("dev", "development", "test", "secret", "")
_MIN_PRODUCTION_SECRET_LENGTH = 32


def parse_duration(value: str | int) -> int:
    """Convert ``"15m"``/``"1d"``/``3600`` style durations to seconds."""
    if isinstance(value, bool):
        raise ValueError("duration must be a number of seconds or e.g. '15m', '1d'")
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(str(value))
        if not match:
            raise ValueError(f"invalid duration: {value!r}")
        seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2).lower()]
    if seconds <= 0:
        raise ValueError("duration must be positive")
    return seconds


def _section_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authflow.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")
    echo: bool = Field(False, alias="DATABASE_ECHO")

    model_config = _section_config()

    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class TokenConfig(BaseSettings):
    """Signing parameters for session tokens.

    Handed to the token signer at construction; nothing reads the secret from
    the environment after this object is built.
    """

    secret: str = Field("dev", alias="JWT_SECRET")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    expires_in: int = Field(86400, alias="JWT_EXPIRES_IN")

    model_config = _section_config()

    @field_validator("expires_in", mode="before")
    @classmethod
    def _parse_expires_in(cls, value: str | int) -> int:
        return parse_duration(value)


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _section_config()

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    token: TokenConfig = Field(default_factory=_token_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: Any) -> str:
        return str(value).upper()

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        secret = self.token.secret
        if secret in _INSECURE_SECRETS or len(secret) < _MIN_PRODUCTION_SECRET_LENGTH:
            raise ValueError(
                "JWT_SECRET must be a strong random value in production "
                f"(at least {_MIN_PRODUCTION_SECRET_LENGTH} characters)"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
    "parse_duration",
]
