# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .pastes.entities import NewPaste, Paste
from .users.entities import LoginAttempt, Registration, TokenClaims, User

__all__ = [
    "DomainError",
    "InvariantViolation",
    "LoginAttempt",
    "NewPaste",
    "Paste",
    "Registration",
    "TokenClaims",
    "User",
]
