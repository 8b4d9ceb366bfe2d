# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from threading import Lock

from pastebin.domain.pastes.entities import Paste
from pastebin.domain.pastes.exceptions import PasteIdCollisionError
from pastebin.domain.pastes.repositories import PasteRepository


class InMemoryPasteRepository(PasteRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._pastes: dict[int, Paste] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._pastes)

    def add(self, paste: Paste) -> Paste:
        with self._lock:
            if paste.id in self._pastes:
                raise PasteIdCollisionError()
            self._pastes[paste.id] = paste
            return paste

    def find_by_id(self, paste_id: int) -> Paste | None:
        with self._lock:
            return self._pastes.get(paste_id)

    def take(self, paste_id: int) -> Paste | None:
        with self._lock:
            return self._pastes.pop(paste_id, None)

    def delete(self, paste_id: int) -> bool:
        with self._lock:
            return self._pastes.pop(paste_id, None) is not None
