# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, DatabaseConfig, SecurityConfig, TokenConfig, load_config

__all__ = ["AppConfig", "DatabaseConfig", "SecurityConfig", "TokenConfig", "load_config"]
