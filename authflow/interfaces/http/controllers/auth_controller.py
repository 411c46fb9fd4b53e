# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from authflow.application.use_cases.users.authenticate_token import AuthenticateTokenUseCase
from authflow.application.use_cases.users.sign_in import SignInUseCase
from authflow.application.use_cases.users.sign_out import SignOutUseCase
from authflow.application.use_cases.users.sign_up import SignUpUseCase
from authflow.interfaces.http.authorize import authorize
from authflow.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    MessageDTO,
    SignInRequestDTO,
    SignUpRequestDTO,
    UserDTO,
)
from authflow.shared.errors.validation import raise_validation_error
from authflow.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        sign_up_use_case: SignUpUseCase,
        sign_in_use_case: SignInUseCase,
        sign_out_use_case: SignOutUseCase,
        authenticate_use_case: AuthenticateTokenUseCase,
    ) -> None:
        self._sign_up_use_case = sign_up_use_case
        self._sign_in_use_case = sign_in_use_case
        self._sign_out_use_case = sign_out_use_case
        self._authenticate_use_case = authenticate_use_case

    def sign_up(self) -> tuple[Response, int]:
        try:
            dto = SignUpRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._sign_up_use_case.execute(dto.name, dto.email, dto.password)

        payload = AuthSuccessDTO.build("User created successfully", user, token)
        logger.info(f"auth.sign_up: responded user_id={user.id}")
        return jsonify(payload.to_json()), HTTPStatus.CREATED

    def sign_in(self) -> tuple[Response, int]:
        try:
            dto = SignInRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._sign_in_use_case.execute(dto.email, dto.password)

        payload = AuthSuccessDTO.build("User signed in successfully", user, token)
        return jsonify(payload.to_json()), HTTPStatus.OK

    def sign_out(self) -> tuple[Response, int]:
        self._sign_out_use_case.execute()
        payload = MessageDTO(message="User signed out successfully")
        return jsonify(payload.model_dump()), HTTPStatus.OK

    def me(self) -> tuple[Response, int]:
        user = UserDTO.from_entity(g.current_user)
        return (
            jsonify({"success": True, "data": {"user": user.model_dump(mode="json", by_alias=True)}}),
            HTTPStatus.OK,
        )

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")
        bp.add_url_rule("/sign-up", view_func=self.sign_up, methods=["POST"])
        bp.add_url_rule("/sign-in", view_func=self.sign_in, methods=["POST"])
        bp.add_url_rule("/sign-out", view_func=self.sign_out, methods=["POST"])
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=authorize(self._authenticate_use_case)(self.me),
            methods=["GET"],
        )
        return bp
