# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, stateless session tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from pastebin.domain.users.entities import TokenClaims
from pastebin.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from pastebin.domain.users.repositories import TokenCodec
from pastebin.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenCodec(TokenCodec):
    """HMAC-signed JWTs carrying ``sub``, ``iat`` and ``exp``.

    Expiry is checked against the injected clock instead of PyJWT's own so
    that validity windows can be tested deterministically.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, subject: str, ttl: timedelta) -> str:
        now = self._clock()
        payload = {"sub": subject, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "iat", "exp"],
                },
            )
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (jwt.PyJWTError, TypeError, ValueError, OverflowError) as exc:
            logger.debug(f"token.verify: rejected {type(exc).__name__}")
            raise InvalidTokenError() from exc

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError()

        if self._clock() > expires_at:
            raise TokenExpiredError(context={"expired_at": expires_at.isoformat()})

        return TokenClaims(subject=subject, issued_at=issued_at, expires_at=expires_at)
