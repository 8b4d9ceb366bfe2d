# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Paste


class PasteRepository(Protocol):
    def add(self, paste: Paste) -> Paste:
        """Insert ``paste``; raises ``PasteIdCollisionError`` if the id is taken."""
        ...

    def find_by_id(self, paste_id: int) -> Paste | None: ...

    def take(self, paste_id: int) -> Paste | None:
        """Atomically read and delete. Only one concurrent caller gets the paste."""
        ...

    def delete(self, paste_id: int) -> bool: ...
