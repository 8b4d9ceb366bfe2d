# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Paste entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from pastebin.domain.exceptions import InvariantViolation
from pastebin.shared.utils import base62


@dataclass(slots=True, frozen=True)
class Paste:
    """A stored snippet addressed publicly by the base-62 form of ``id``."""

    id: int
    body: str = field(repr=False)
    syntax: str
    created_at: datetime
    title: str | None = None
    password_hash: str | None = field(default=None, repr=False)
    delete_after_read: bool = False
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.id <= base62.MAX_UINT64:
            raise InvariantViolation("id must fit in 64 unsigned bits", field="id")
        if not self.body:
            raise InvariantViolation("body must not be empty", field="body")
        if not self.syntax:
            raise InvariantViolation("syntax must not be empty", field="syntax")
        if self.expires_at is not None and self.expires_at < self.created_at:
            raise InvariantViolation("expiry precedes creation", field="expires_at")

    @property
    def short_id(self) -> str:
        return base62.encode(self.id)

    @property
    def is_protected(self) -> bool:
        return self.password_hash is not None

    def is_expired(self, now: datetime) -> bool:
        """Expired from ``expires_at`` on, so a zero TTL is never readable."""
        return self.expires_at is not None and now >= self.expires_at


@dataclass(slots=True, frozen=True)
class NewPaste:
    """Caller input for ``PasteService.create``.

    ``ttl=None`` falls back to the service default; a default of ``None``
    means the paste never expires.
    """

    body: str = field(repr=False)
    syntax: str
    title: str | None = None
    password: str | None = field(default=None, repr=False)
    delete_after_read: bool = False
    ttl: timedelta | None = None
