"""
Storage layer for the companion.

Provides the RecordStore interface and its implementations:
- InMemoryRecordStore: For testing (no external dependencies)
- DoltRecordStore: For production (requires a running Dolt SQL server)
"""

from __future__ import annotations

from companion.db.dolt import (
    DoltConnection,
    DoltRecordStore,
    init_dolt_schema,
)
from companion.db.interfaces import (
    ChangeCallback,
    Record,
    RecordStore,
    StorageError,
)
from companion.db.memory import InMemoryRecordStore

__all__ = [
    # Protocol interface
    "ChangeCallback",
    "Record",
    "RecordStore",
    "StorageError",
    # In-memory implementation (for testing)
    "InMemoryRecordStore",
    # Real database implementation
    "DoltConnection",
    "DoltRecordStore",
    "init_dolt_schema",
]
