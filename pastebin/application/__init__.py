# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.paste_service import PasteService
from .services.user_service import UserService

__all__ = ["PasteService", "UserService"]
