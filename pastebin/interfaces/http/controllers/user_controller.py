# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from pastebin.application.services.user_service import UserService
from pastebin.domain.users.entities import LoginAttempt, Registration
from pastebin.domain.users.exceptions import InvalidTokenError
from pastebin.interfaces.http.dto.users import (
    ClaimsDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenDTO,
    UserDTO,
)
from pastebin.shared.errors.validation import raise_validation_error
from pastebin.shared.logging import logger


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip()
    return ""


class UserController:
    def __init__(self, *, user_service: UserService, token_ttl: timedelta) -> None:
        self._users = user_service
        self._token_ttl = token_ttl

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._users.create(
            Registration(
                username=dto.username,
                email=dto.email,
                password=dto.password,
                password_confirmation=dto.password_confirmation,
            )
        )
        payload = UserDTO(
            id=user.id, username=user.username, email=user.email, created_at=user.created_at
        )
        logger.info(f"http.register: ok user_id={user.id}")
        return jsonify(payload.model_dump(mode="json")), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        token = self._users.authenticate(LoginAttempt(username=dto.username, password=dto.password))
        payload = TokenDTO(token=token, expires_in=int(self._token_ttl.total_seconds()))
        return jsonify(payload.model_dump(mode="json")), 200

    def session(self, username: str) -> tuple[Response, int]:
        token = _bearer_token()
        if not token:
            raise InvalidTokenError(context={"reason": "missing_bearer_token"})
        claims = self._users.validate(username, token)
        payload = ClaimsDTO(
            subject=claims.subject, issued_at=claims.issued_at, expires_at=claims.expires_at
        )
        return jsonify(payload.model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/<username>/session", view_func=self.session, methods=["GET"])
        return bp
