# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import cached_property

from pastebin.domain.users.entities import LoginAttempt, Registration, TokenClaims, User
from pastebin.domain.users.exceptions import InvalidCredentialsError, InvalidTokenError
from pastebin.domain.users.repositories import PasswordHasher, TokenCodec, UserRepository
from pastebin.shared.errors.base import ValidationError
from pastebin.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserService:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenCodec,
        token_ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._token_ttl = token_ttl
        self._clock = clock

    @cached_property
    def _dummy_hash(self) -> str:
        return self._password_hasher.hash(secrets.token_urlsafe(16))

    def create(self, registration: Registration) -> User:
        username = registration.username.strip()
        email = registration.email.strip()
        if not username:
            raise ValidationError(context={"fields": ["username"]})
        if not email:
            raise ValidationError(context={"fields": ["email"]})
        if not registration.password:
            raise ValidationError(context={"fields": ["password"]})
        if registration.password != registration.password_confirmation:
            raise ValidationError("password_mismatch", context={"fields": ["password_confirmation"]})

        # Hash outside of the store's critical section.
        hashed = self._password_hasher.hash(registration.password)
        user = User(
            id=0,
            username=username,
            email=email,
            password_hash=hashed,
            created_at=self._clock(),
        )
        persisted = self._users.add(user)
        logger.info(f"user.create: ok user_id={persisted.id}")
        return persisted.without_password()

    def authenticate(self, login: LoginAttempt) -> str:
        user = self._users.find_by_username(login.username.strip())
        if user is None:
            # Same amount of hashing work as a wrong password.
            self._password_hasher.verify(login.password, self._dummy_hash)
            logger.info("user.authenticate: rejected")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(login.password, user.password_hash):
            logger.info("user.authenticate: rejected")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.username, self._token_ttl)
        logger.info(f"user.authenticate: ok user_id={user.id}")
        return token

    def validate(self, user: User | str, token: str) -> TokenClaims:
        username = user.username if isinstance(user, User) else user.strip()
        claims = self._tokens.verify(token)
        if claims.subject != username:
            logger.info("user.validate: subject mismatch")
            raise InvalidTokenError()
        return claims
