"""
Record store interface for the companion.

The host platform's shared metadata is modelled as a key-value store of
JSON-compatible records. Implementations can use a real database or an
in-memory dictionary for testing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

Record = dict[str, Any]

# Called with (key, record); record is None when the key was deleted
ChangeCallback = Callable[[str, Record | None], None]


class StorageError(Exception):
    """A read or write against the record store failed."""


class RecordStore(Protocol):
    """
    Interface for the shared record store.

    Every write replaces the whole record. Readers get their own copy.
    """

    def get(self, key: str) -> Record | None:
        """Get a record by key, or None if absent."""
        ...

    def put(self, key: str, record: Record) -> None:
        """Insert or replace a record."""
        ...

    def delete(self, key: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with a prefix, sorted."""
        ...

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        ...
