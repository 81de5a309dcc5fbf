# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

- connection: engine and session lifecycle
- store: record-level operations with typed failures
- models: ORM tables

Example:
    from edutranscribe.infrastructure.database import get_session, RecordStore

    async with get_session() as session:
        store = RecordStore(session)
        teacher = await store.find_by_unique_key(Teacher, id=teacher_id)
"""

from edutranscribe.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    create_tables,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)
from edutranscribe.infrastructure.database.store import (
    ConflictUniqueConstraintError,
    RecordNotFoundError,
    RecordStore,
    StoreError,
    TransientStoreError,
)

__all__ = [
    # Connection
    "DatabaseError",
    "close_database",
    "create_tables",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
    # Store
    "RecordStore",
    "StoreError",
    "RecordNotFoundError",
    "ConflictUniqueConstraintError",
    "TransientStoreError",
]
