# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pastebin.domain.pastes.entities import Paste as DomainPaste
from pastebin.domain.pastes.exceptions import PasteIdCollisionError
from pastebin.domain.pastes.repositories import PasteRepository
from pastebin.infrastructure.db.models import Paste
from pastebin.infrastructure.db.session import SessionFactory, session_scope
from pastebin.shared.errors.base import StorageError
from pastebin.shared.logging import logger

_TWO_64 = 2**64
_TWO_63 = 2**63


def to_signed(paste_id: int) -> int:
    return paste_id - _TWO_64 if paste_id >= _TWO_63 else paste_id


def to_unsigned(stored_id: int) -> int:
    return stored_id + _TWO_64 if stored_id < 0 else stored_id


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: Paste) -> DomainPaste:
    return DomainPaste(
        id=to_unsigned(row.id),
        title=row.title,
        body=row.body,
        syntax=row.syntax,
        password_hash=row.password_hash,
        delete_after_read=bool(row.delete_after_read),
        created_at=_as_utc(row.created_at),
        expires_at=_as_utc(row.expires_at),
    )


class SqlAlchemyPasteRepository(PasteRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def add(self, paste: DomainPaste) -> DomainPaste:
        try:
            with session_scope(self._session_factory) as session:
                session.add(
                    Paste(
                        id=to_signed(paste.id),
                        title=paste.title,
                        body=paste.body,
                        syntax=paste.syntax,
                        password_hash=paste.password_hash,
                        delete_after_read=paste.delete_after_read,
                        created_at=_as_utc(paste.created_at),
                        expires_at=_as_utc(paste.expires_at),
                    )
                )
        except IntegrityError as exc:
            raise PasteIdCollisionError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"paste.add: {type(exc).__name__}")
            raise StorageError("paste.add") from exc
        return paste

    def find_by_id(self, paste_id: int) -> DomainPaste | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Paste, to_signed(paste_id))
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"paste.find_by_id: {type(exc).__name__}")
            raise StorageError("paste.find_by_id") from exc

    def take(self, paste_id: int) -> DomainPaste | None:
        stored_id = to_signed(paste_id)
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(Paste, stored_id)
                if row is None:
                    return None
                paste = _to_domain(row)
                result = session.execute(
                    delete(Paste)
                    .where(Paste.id == stored_id)
                    .execution_options(synchronize_session=False)
                )
                # another transaction deleted it between our read and delete
                if result.rowcount != 1:
                    return None
                return paste
        except SQLAlchemyError as exc:
            logger.error(f"paste.take: {type(exc).__name__}")
            raise StorageError("paste.take") from exc

    def delete(self, paste_id: int) -> bool:
        try:
            with session_scope(self._session_factory) as session:
                result = session.execute(
                    delete(Paste)
                    .where(Paste.id == to_signed(paste_id))
                    .execution_options(synchronize_session=False)
                )
                return result.rowcount > 0
        except SQLAlchemyError as exc:
            logger.error(f"paste.delete: {type(exc).__name__}")
            raise StorageError("paste.delete") from exc
