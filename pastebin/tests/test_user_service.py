from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from pastebin.application.services.user_service import UserService
from pastebin.domain.users.entities import LoginAttempt, Registration
from pastebin.domain.users.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserAlreadyExistsError,
)
from pastebin.infrastructure.repositories import InMemoryUserRepository
from pastebin.shared.errors import DuplicateError, ValidationError

from .conftest import FrozenClock


def _registration(
    username: str = "alice",
    email: str = "a@x.com",
    password: str = "pw123",
    confirm: str | None = None,
) -> Registration:
    return Registration(
        username=username,
        email=email,
        password=password,
        password_confirmation=password if confirm is None else confirm,
    )


def test_create_user_returns_user_without_password(
    user_service: UserService, user_repository: InMemoryUserRepository
) -> None:
    user = user_service.create(_registration())

    assert user.id > 0
    assert user.username == "alice"
    assert user.email == "a@x.com"
    assert user.password_hash == ""
    stored = user_repository.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash == "hashed:pw123"


def test_create_user_duplicate_username(user_service: UserService) -> None:
    user_service.create(_registration())

    with pytest.raises(UserAlreadyExistsError) as excinfo:
        user_service.create(_registration(email="b@x.com"))
    assert isinstance(excinfo.value, DuplicateError)


def test_create_user_duplicate_email(user_service: UserService) -> None:
    user_service.create(_registration())

    with pytest.raises(UserAlreadyExistsError):
        user_service.create(_registration(username="alice2"))


@pytest.mark.parametrize(
    ("registration", "field"),
    [
        (_registration(username=""), "username"),
        (_registration(username="   "), "username"),
        (_registration(email=""), "email"),
        (_registration(password=""), "password"),
        (_registration(confirm="pw124"), "password_confirmation"),
    ],
)
def test_create_user_validation(
    user_service: UserService, registration: Registration, field: str
) -> None:
    with pytest.raises(ValidationError) as excinfo:
        user_service.create(registration)
    assert excinfo.value.context == {"fields": [field]}


def test_password_mismatch_has_its_own_code(user_service: UserService) -> None:
    with pytest.raises(ValidationError) as excinfo:
        user_service.create(_registration(confirm="other"))
    assert excinfo.value.code == "password_mismatch"


def test_authenticate_returns_valid_token(user_service: UserService) -> None:
    user = user_service.create(_registration())

    token = user_service.authenticate(LoginAttempt(username="alice", password="pw123"))

    assert token
    assert user_service.validate(user, token).subject == "alice"


def test_padded_username_round_trip(user_service: UserService) -> None:
    user = user_service.create(_registration(username=" alice "))

    token = user_service.authenticate(LoginAttempt(username=" alice ", password="pw123"))

    assert user.username == "alice"
    assert user_service.validate(" alice ", token).subject == "alice"
    assert user_service.validate("alice", token).subject == "alice"


@pytest.mark.parametrize(
    "login",
    [
        LoginAttempt(username="alice", password="wrong"),
        LoginAttempt(username="nobody", password="pw123"),
    ],
)
def test_authenticate_failures_are_indistinguishable(
    user_service: UserService, login: LoginAttempt
) -> None:
    user_service.create(_registration())

    with pytest.raises(InvalidCredentialsError) as excinfo:
        user_service.authenticate(login)
    assert excinfo.value.to_dict() == {"error": "invalid_credentials"}


def test_authenticate_unknown_user_still_verifies_a_hash(
    user_repository: InMemoryUserRepository, token_codec, clock: FrozenClock
) -> None:
    calls: list[str] = []

    class CountingHasher:
        def hash(self, password: str) -> str:
            return f"hashed:{password}"

        def verify(self, password: str, hashed: str) -> bool:
            calls.append(password)
            return hashed == f"hashed:{password}"

    service = UserService(
        users=user_repository,
        password_hasher=CountingHasher(),
        tokens=token_codec,
        token_ttl=timedelta(hours=1),
        clock=clock,
    )

    with pytest.raises(InvalidCredentialsError):
        service.authenticate(LoginAttempt(username="ghost", password="pw123"))
    assert calls == ["pw123"]


def test_validate_rejects_token_of_other_user(user_service: UserService) -> None:
    alice = user_service.create(_registration())
    user_service.create(_registration(username="bob", email="b@x.com"))
    bob_token = user_service.authenticate(LoginAttempt(username="bob", password="pw123"))

    with pytest.raises(InvalidTokenError):
        user_service.validate(alice, bob_token)
    assert user_service.validate("bob", bob_token).subject == "bob"


def test_validate_rejects_expired_token(user_service: UserService, clock: FrozenClock) -> None:
    user = user_service.create(_registration())
    token = user_service.authenticate(LoginAttempt(username="alice", password="pw123"))

    clock.advance(timedelta(hours=1, seconds=1))

    with pytest.raises(TokenExpiredError):
        user_service.validate(user, token)


def test_validate_rejects_garbage(user_service: UserService) -> None:
    user = user_service.create(_registration())

    with pytest.raises(InvalidTokenError):
        user_service.validate(user, "garbage")


@pytest.mark.parametrize("shared", ["username", "email"])
def test_concurrent_registrations_single_winner(user_service: UserService, shared: str) -> None:
    workers = 8
    barrier = threading.Barrier(workers)

    def register(index: int) -> str:
        username = "alice" if shared == "username" else f"alice{index}"
        email = "a@x.com" if shared == "email" else f"a{index}@x.com"
        barrier.wait()
        try:
            user_service.create(_registration(username=username, email=email))
        except UserAlreadyExistsError:
            return "duplicate"
        return "created"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(register, range(workers)))

    assert results.count("created") == 1
    assert results.count("duplicate") == workers - 1
