# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager, nullcontext
from weakref import WeakKeyDictionary

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pastebin.shared.config import DatabaseConfig
from pastebin.shared.errors.base import StorageError
from pastebin.shared.logging import logger

SessionFactory = Callable[[], Session]

# Engines whose sessions share a single DBAPI connection. A transaction on
# such a connection belongs to every thread, so sessions run one at a time.
_SERIALIZED_ENGINES: WeakKeyDictionary[Engine, threading.RLock] = WeakKeyDictionary()


class Base(DeclarativeBase):
    pass


def _is_in_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_db_engine(config: DatabaseConfig) -> Engine:
    kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    in_memory = False
    if config.url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
        in_memory = _is_in_memory_sqlite(config.url)
        if in_memory:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )
    engine = create_engine(config.url, **kwargs)
    if in_memory:
        _SERIALIZED_ENGINES[engine] = threading.RLock()
        logger.debug("db.engine: in-memory sqlite, sessions serialized")
    return engine


def create_session_factory(engine: Engine) -> SessionFactory:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: SessionFactory) -> Iterator[Session]:
    session = session_factory()
    bind = session.get_bind()
    lock = _SERIALIZED_ENGINES.get(bind) if isinstance(bind, Engine) else None
    with lock if lock is not None else nullcontext():
        logger.debug("db.session: opened")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed")
        except Exception as exc:
            logger.debug(f"db.session: rolling back after {type(exc).__name__}")
            session.rollback()
            raise
        finally:
            session.close()


def init_db(engine: Engine) -> None:
    # registers the mapped tables on Base.metadata
    from pastebin.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def check_connection(session_factory: SessionFactory) -> None:
    try:
        with session_scope(session_factory) as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"db.ping: failed {type(exc).__name__}")
        raise StorageError("db.ping") from exc
