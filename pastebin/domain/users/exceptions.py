# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from pastebin.shared.errors.base import DomainError, DuplicateError


class UserAlreadyExistsError(DuplicateError):
    code = "user_already_exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED


class TokenExpiredError(InvalidTokenError):
    code = "token_expired"
