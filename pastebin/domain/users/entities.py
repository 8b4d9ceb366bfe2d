# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def without_password(self) -> User:
        return replace(self, password_hash="")


@dataclass(slots=True, frozen=True)
class Registration:
    """Sign-up form, consumed once by ``UserService.create``."""

    username: str
    email: str
    password: str = field(repr=False)
    password_confirmation: str = field(repr=False)


@dataclass(slots=True, frozen=True)
class LoginAttempt:

    username: str
    password: str = field(repr=False)


@dataclass(slots=True, frozen=True)
class TokenClaims:

    subject: str
    issued_at: datetime
    expires_at: datetime
