# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Composition root: one store pair and the services built on it."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine

from pastebin.application.services.password_hashing import WerkzeugPasswordHasher
from pastebin.application.services.paste_service import PasteService
from pastebin.application.services.tokens import JwtTokenCodec
from pastebin.application.services.user_service import UserService
from pastebin.domain.pastes.repositories import PasteRepository
from pastebin.domain.users.repositories import UserRepository
from pastebin.infrastructure.db import (
    SessionFactory,
    check_connection,
    create_db_engine,
    create_session_factory,
    init_db,
)
from pastebin.infrastructure.repositories import (
    InMemoryPasteRepository,
    InMemoryUserRepository,
    SqlAlchemyPasteRepository,
    SqlAlchemyUserRepository,
)
from pastebin.interfaces.http.controllers.paste_controller import PasteController
from pastebin.interfaces.http.controllers.user_controller import UserController
from pastebin.shared.config import AppConfig
from pastebin.shared.logging import logger


class Container:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def uses_database(self) -> bool:
        return self._config.storage_backend == "sql"

    @cached_property
    def engine(self) -> Engine:
        engine = create_db_engine(self._config.database)
        if self._config.database.auto_migrate:
            init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> SessionFactory:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_database:
            return SqlAlchemyUserRepository(self.session_factory)
        return InMemoryUserRepository()

    @cached_property
    def paste_repository(self) -> PasteRepository:
        if self.uses_database:
            return SqlAlchemyPasteRepository(self.session_factory)
        return InMemoryPasteRepository()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self._config.auth.password_hash_method)

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        return JwtTokenCodec(
            self._config.secret_key, algorithm=self._config.auth.token_algorithm
        )

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(seconds=self._config.auth.token_ttl_seconds)

    @property
    def paste_default_ttl(self) -> timedelta | None:
        seconds = self._config.paste.default_ttl_seconds
        return timedelta(seconds=seconds) if seconds is not None else None

    @cached_property
    def user_service(self) -> UserService:
        return UserService(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_codec,
            token_ttl=self.token_ttl,
        )

    @cached_property
    def paste_service(self) -> PasteService:
        return PasteService(
            pastes=self.paste_repository,
            password_hasher=self.password_hasher,
            default_ttl=self.paste_default_ttl,
            max_id_attempts=self._config.paste.id_max_attempts,
        )

    @cached_property
    def user_controller(self) -> UserController:
        return UserController(user_service=self.user_service, token_ttl=self.token_ttl)

    @cached_property
    def paste_controller(self) -> PasteController:
        return PasteController(paste_service=self.paste_service)

    def ping(self) -> None:
        """Raise ``StorageError`` when the backing store is unreachable."""
        if self.uses_database:
            check_connection(self.session_factory)

    def close(self) -> None:
        if "engine" in self.__dict__:
            self.engine.dispose()
            logger.info("container: database engine disposed")
