# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pastebin.shared.errors.base import DomainError, ValidationError


class InvariantViolationError(ValidationError):
    def __init__(self, message: str, *, field: str | None = None):
        context = {"message": message}
        if field:
            context["field"] = field
        super().__init__(code="invariant_violation", context=context)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


InvariantViolation = InvariantViolationError

__all__ = ["DomainError", "InvariantViolation", "InvariantViolationError"]
