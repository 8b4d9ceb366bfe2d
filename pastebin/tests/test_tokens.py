from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from pastebin.application.services.tokens import JwtTokenCodec
from pastebin.domain.users.exceptions import InvalidTokenError, TokenExpiredError

from .conftest import TEST_SECRET, FrozenClock


def test_issue_then_verify(token_codec: JwtTokenCodec, clock: FrozenClock) -> None:
    token = token_codec.issue("alice", timedelta(minutes=5))

    claims = token_codec.verify(token)

    assert claims.subject == "alice"
    assert claims.issued_at == clock.now
    assert claims.expires_at == clock.now + timedelta(minutes=5)


def test_token_valid_until_expiry(token_codec: JwtTokenCodec, clock: FrozenClock) -> None:
    token = token_codec.issue("alice", timedelta(minutes=5))

    clock.advance(timedelta(minutes=5))
    assert token_codec.verify(token).subject == "alice"

    clock.advance(timedelta(seconds=1))
    with pytest.raises(TokenExpiredError):
        token_codec.verify(token)


def test_expired_token_is_an_invalid_token(token_codec: JwtTokenCodec, clock: FrozenClock) -> None:
    token = token_codec.issue("alice", timedelta(seconds=1))
    clock.advance(timedelta(hours=1))

    with pytest.raises(InvalidTokenError):
        token_codec.verify(token)


def test_tampered_token_is_rejected(token_codec: JwtTokenCodec) -> None:
    token = token_codec.issue("alice", timedelta(minutes=5))
    header, payload, signature = token.split(".")
    forged = jwt.encode(
        {"sub": "mallory", "iat": 0, "exp": 2**40}, "another-secret-that-is-long-enough!!"
    )
    _, forged_payload, _ = forged.split(".")

    with pytest.raises(InvalidTokenError) as excinfo:
        token_codec.verify(f"{header}.{forged_payload}.{signature}")
    assert not isinstance(excinfo.value, TokenExpiredError)


def test_token_signed_with_other_secret_is_rejected(clock: FrozenClock) -> None:
    other = JwtTokenCodec("another-secret-that-is-long-enough!!", clock=clock)
    token = other.issue("alice", timedelta(minutes=5))

    with pytest.raises(InvalidTokenError):
        JwtTokenCodec(TEST_SECRET, clock=clock).verify(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "a.b"])
def test_malformed_token_is_rejected(token_codec: JwtTokenCodec, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        token_codec.verify(token)


def test_token_without_expiry_is_rejected(token_codec: JwtTokenCodec) -> None:
    token = jwt.encode({"sub": "alice", "iat": 0}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        token_codec.verify(token)


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        JwtTokenCodec("")
