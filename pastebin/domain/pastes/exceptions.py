# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pastebin.shared.errors.base import DuplicateError, NotFoundError, UnauthorizedError


class PasteNotFoundError(NotFoundError):
    code = "paste_not_found"


class PasteIdCollisionError(DuplicateError):
    code = "paste_id_collision"


class PastePasswordRequiredError(UnauthorizedError):
    code = "paste_password_required"


class InvalidPastePasswordError(UnauthorizedError):
    code = "paste_password_invalid"
