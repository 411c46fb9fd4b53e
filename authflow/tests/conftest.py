from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authflow.app import create_app
from authflow.container import Container
from authflow.shared.config import AppConfig, DatabaseConfig, TokenConfig

TEST_SECRET = "test-secret-with-enough-entropy-0123456789"


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="test",
        log_level="WARNING",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'authflow.db'}"),
        token=TokenConfig(secret=TEST_SECRET, algorithm="HS256", expires_in=3600),
    )


@pytest.fixture()
def app(app_config: AppConfig) -> Flask:
    return create_app(app_config)


@pytest.fixture()
def container(app: Flask) -> Container:
    return app.extensions["authflow.container"]


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
