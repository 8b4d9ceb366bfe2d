# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pastebin.domain.users.entities import User as DomainUser
from pastebin.domain.users.exceptions import UserAlreadyExistsError
from pastebin.domain.users.repositories import UserRepository
from pastebin.infrastructure.db.models import User
from pastebin.infrastructure.db.session import SessionFactory, session_scope
from pastebin.shared.errors.base import StorageError
from pastebin.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo; values are always written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def _find_one(self, operation: str, *criteria) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(User).filter(*criteria).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"{operation}: {type(exc).__name__}")
            raise StorageError(operation) from exc

    def find_by_username(self, username: str) -> DomainUser | None:
        return self._find_one("user.find_by_username", User.username == username)

    def find_by_email(self, email: str) -> DomainUser | None:
        return self._find_one("user.find_by_email", User.email == email)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        return self._find_one("user.find_by_id", User.id == user_id)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                existing = (
                    session.query(User)
                    .filter(or_(User.username == user.username, User.email == user.email))
                    .first()
                )
                if existing:
                    field = "username" if existing.username == user.username else "email"
                    raise UserAlreadyExistsError(context={"field": field})
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=_as_utc(user.created_at),
                )
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            # lost a race against a concurrent insert; the unique index decided
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"user.add: {type(exc).__name__}")
            raise StorageError("user.add") from exc
        return persisted
