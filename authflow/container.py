# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authflow.application.services.password_hashing import WerkzeugPasswordHasher
from authflow.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authflow.application.use_cases.users.sign_in import SignInUseCase
from authflow.application.use_cases.users.sign_out import SignOutUseCase
from authflow.application.use_cases.users.sign_up import SignUpUseCase
from authflow.infrastructure.db import build_engine, build_session_factory
from authflow.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserReader,
)
from authflow.infrastructure.tokens import JoseTokenSigner
from authflow.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from authflow.interfaces.http.controllers.auth_controller import AuthController
from authflow.interfaces.http.controllers.misc_controller import MiscController
from authflow.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.session_factory)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_signer(self) -> JoseTokenSigner:
        return JoseTokenSigner(self.config.token)

    @cached_property
    def user_reader(self) -> SqlAlchemyUserReader:
        return SqlAlchemyUserReader(self.session_factory)

    @cached_property
    def sign_up_use_case(self) -> SignUpUseCase:
        return SignUpUseCase(
            uow_factory=self.unit_of_work,
            tokens=self.token_signer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def sign_in_use_case(self) -> SignInUseCase:
        return SignInUseCase(
            users=self.user_reader,
            tokens=self.token_signer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def sign_out_use_case(self) -> SignOutUseCase:
        return SignOutUseCase()

    @cached_property
    def authenticate_token_use_case(self) -> AuthenticateTokenUseCase:
        return AuthenticateTokenUseCase(users=self.user_reader, tokens=self.token_signer)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            sign_up_use_case=self.sign_up_use_case,
            sign_in_use_case=self.sign_in_use_case,
            sign_out_use_case=self.sign_out_use_case,
            authenticate_use_case=self.authenticate_token_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
