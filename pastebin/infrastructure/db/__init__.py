# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import (
    Base,
    SessionFactory,
    check_connection,
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)

__all__ = [
    "Base",
    "SessionFactory",
    "check_connection",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "session_scope",
]
