# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from pastebin.domain.pastes.entities import NewPaste, Paste
from pastebin.domain.pastes.exceptions import (
    InvalidPastePasswordError,
    PasteIdCollisionError,
    PasteNotFoundError,
    PastePasswordRequiredError,
)
from pastebin.domain.pastes.repositories import PasteRepository
from pastebin.domain.users.repositories import PasswordHasher
from pastebin.shared.errors.base import StorageError, ValidationError
from pastebin.shared.logging import logger
from pastebin.shared.utils import base62

DEFAULT_MAX_ID_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _random_id() -> int:
    return secrets.randbits(64)


class PasteService:
    def __init__(
        self,
        *,
        pastes: PasteRepository,
        password_hasher: PasswordHasher,
        default_ttl: timedelta | None = None,
        max_id_attempts: int = DEFAULT_MAX_ID_ATTEMPTS,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], int] = _random_id,
    ) -> None:
        if max_id_attempts < 1:
            raise ValueError("max_id_attempts must be at least 1")
        self._pastes = pastes
        self._password_hasher = password_hasher
        self._default_ttl = default_ttl
        self._max_id_attempts = max_id_attempts
        self._clock = clock
        self._id_factory = id_factory

    def create(self, new_paste: NewPaste) -> Paste:
        invalid = [
            name for name in ("body", "syntax") if not getattr(new_paste, name).strip()
        ]
        if invalid:
            raise ValidationError(context={"fields": invalid})

        ttl = new_paste.ttl if new_paste.ttl is not None else self._default_ttl
        if ttl is not None and ttl < timedelta(0):
            raise ValidationError(context={"fields": ["ttl"]})

        password_hash = None
        if new_paste.password:
            password_hash = self._password_hasher.hash(new_paste.password)

        now = self._clock()
        for attempt in range(1, self._max_id_attempts + 1):
            candidate = Paste(
                id=self._id_factory(),
                title=new_paste.title or None,
                body=new_paste.body,
                syntax=new_paste.syntax,
                password_hash=password_hash,
                delete_after_read=new_paste.delete_after_read,
                created_at=now,
                expires_at=now + ttl if ttl is not None else None,
            )
            try:
                stored = self._pastes.add(candidate)
            except PasteIdCollisionError:
                logger.warning(f"paste.create: id collision attempt={attempt}")
                continue
            logger.info(
                f"paste.create: ok short_id={stored.short_id} "
                f"protected={stored.is_protected} delete_after_read={stored.delete_after_read}"
            )
            return stored

        logger.error(f"paste.create: no free id after {self._max_id_attempts} attempts")
        raise StorageError("paste.create")

    def paste(self, paste_id: int, password: str | None = None) -> Paste:
        if not 0 <= paste_id <= base62.MAX_UINT64:
            raise PasteNotFoundError()

        found = self._pastes.find_by_id(paste_id)
        if found is None:
            raise PasteNotFoundError()

        if found.is_expired(self._clock()):
            self._pastes.delete(paste_id)
            logger.info(f"paste.read: expired short_id={found.short_id}, removed")
            raise PasteNotFoundError()

        if found.password_hash is not None:
            if not password:
                raise PastePasswordRequiredError()
            if not self._password_hasher.verify(password, found.password_hash):
                logger.info(f"paste.read: wrong password short_id={found.short_id}")
                raise InvalidPastePasswordError()

        if not found.delete_after_read:
            return found

        taken = self._pastes.take(paste_id)
        if taken is None:
            raise PasteNotFoundError()
        if taken.is_expired(self._clock()):
            raise PasteNotFoundError()
        logger.info(f"paste.read: consumed short_id={taken.short_id}")
        return taken

    def delete(self, paste_id: int) -> None:
        if not 0 <= paste_id <= base62.MAX_UINT64:
            return
        if self._pastes.delete(paste_id):
            logger.info(f"paste.delete: ok short_id={base62.encode(paste_id)}")
