# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock

from pastebin.domain.users.entities import User
from pastebin.domain.users.exceptions import UserAlreadyExistsError
from pastebin.domain.users.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: dict[int, User] = {}
        self._by_username: dict[str, int] = {}
        self._by_email: dict[str, int] = {}
        self._seq = count(1)

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            user_id = self._by_username.get(username)
            return self._users.get(user_id) if user_id is not None else None

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._by_email.get(email)
            return self._users.get(user_id) if user_id is not None else None

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._by_username:
                raise UserAlreadyExistsError(context={"field": "username"})
            if user.email in self._by_email:
                raise UserAlreadyExistsError(context={"field": "email"})
            persisted = replace(user, id=next(self._seq))
            self._users[persisted.id] = persisted
            self._by_username[persisted.username] = persisted.id
            self._by_email[persisted.email] = persisted.id
            return persisted
