# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .pastes.memory_paste_repository import InMemoryPasteRepository
from .pastes.sqlalchemy_paste_repository import SqlAlchemyPasteRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.sqlalchemy_user_repository import SqlAlchemyUserRepository

__all__ = [
    "InMemoryPasteRepository",
    "InMemoryUserRepository",
    "SqlAlchemyPasteRepository",
    "SqlAlchemyUserRepository",
]
