"""
In-memory record store for testing.

Stores records in a dictionary, making tests fast and isolated from
database infrastructure.
"""

from __future__ import annotations

from collections.abc import Callable
from copy import deepcopy

from companion.db.interfaces import ChangeCallback, Record


class InMemoryRecordStore:
    """
    In-memory implementation of RecordStore.

    Records are deep-copied on the way in and out so callers never share
    state with the store. Subscribers are notified synchronously after each
    write or delete.
    """

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}
        self._subscribers: list[ChangeCallback] = []

    def get(self, key: str) -> Record | None:
        """Get a record by key, or None if absent."""
        record = self._records.get(key)
        return deepcopy(record) if record is not None else None

    def put(self, key: str, record: Record) -> None:
        """Insert or replace a record."""
        self._records[key] = deepcopy(record)
        self._notify(key, record)

    def delete(self, key: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        if key not in self._records:
            return False
        del self._records[key]
        self._notify(key, None)
        return True

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with a prefix, sorted."""
        return sorted(k for k in self._records if k.startswith(prefix))

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def clear(self) -> None:
        """Clear all records (for test setup)."""
        self._records.clear()

    def _notify(self, key: str, record: Record | None) -> None:
        for callback in list(self._subscribers):
            callback(key, deepcopy(record) if record is not None else None)
