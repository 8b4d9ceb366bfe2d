# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import TokenClaims, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...

    def add(self, user: User) -> User:
        """Insert ``user`` and return it with its assigned id.

        Raises ``UserAlreadyExistsError`` when the username or the email is
        taken; the check and the insert are a single atomic step.
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenCodec(Protocol):
    def issue(self, subject: str, ttl: timedelta) -> str: ...

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token``; raises ``InvalidTokenError`` or ``TokenExpiredError``."""
        ...
