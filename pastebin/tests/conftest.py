from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from pastebin.application.services.paste_service import PasteService
from pastebin.application.services.tokens import JwtTokenCodec
from pastebin.application.services.user_service import UserService
from pastebin.domain.users.repositories import PasswordHasher
from pastebin.infrastructure.db import create_db_engine, create_session_factory, init_db
from pastebin.infrastructure.db.session import SessionFactory
from pastebin.infrastructure.repositories import (
    InMemoryPasteRepository,
    InMemoryUserRepository,
)
from pastebin.shared.config import DatabaseConfig

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def token_codec(clock: FrozenClock) -> JwtTokenCodec:
    return JwtTokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture()
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def paste_repository() -> InMemoryPasteRepository:
    return InMemoryPasteRepository()


@pytest.fixture()
def user_service(
    user_repository: InMemoryUserRepository,
    hasher: DeterministicHasher,
    token_codec: JwtTokenCodec,
    clock: FrozenClock,
) -> UserService:
    return UserService(
        users=user_repository,
        password_hasher=hasher,
        tokens=token_codec,
        token_ttl=timedelta(hours=1),
        clock=clock,
    )


@pytest.fixture()
def paste_service(
    paste_repository: InMemoryPasteRepository,
    hasher: DeterministicHasher,
    clock: FrozenClock,
) -> PasteService:
    return PasteService(pastes=paste_repository, password_hasher=hasher, clock=clock)


@pytest.fixture()
def sql_session_factory(tmp_path: Path) -> Iterator[SessionFactory]:
    engine = create_db_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'pastebin.db'}"))
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def memory_sql_session_factory() -> Iterator[SessionFactory]:
    # one shared connection under StaticPool
    engine = create_db_engine(DatabaseConfig(url="sqlite://"))
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()
