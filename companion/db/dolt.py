"""
Dolt record store for the companion.

Uses mysql-connector-python to connect to a Dolt SQL server. Each write
is a Dolt commit, so the history of every character and trade record can
be inspected with Dolt's log.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import mysql.connector
from mysql.connector.cursor import MySQLCursor

from companion.config import CompanionSettings
from companion.db.interfaces import ChangeCallback, Record, StorageError

logger = logging.getLogger(__name__)


class DoltConnection:
    """
    Connection manager for Dolt database.

    Opens the connection lazily and reconnects if it has dropped.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        user: str = "root",
        password: str = "",
        database: str = "companion",
    ) -> None:
        self.config = {
            "host": host,
            "port": port,
            "user": user,
            "password": password,
            "database": database,
            "autocommit": True,
        }
        self._connection: Any = None

    @classmethod
    def from_settings(cls, settings: CompanionSettings) -> DoltConnection:
        """Build a connection from companion settings."""
        return cls(
            host=settings.dolt_host,
            port=settings.dolt_port,
            user=settings.dolt_user,
            password=settings.dolt_password,
            database=settings.dolt_database,
        )

    def get_connection(self) -> Any:
        """Get or create a database connection."""
        if self._connection is None or not self._connection.is_connected():
            try:
                self._connection = mysql.connector.connect(**self.config)
            except mysql.connector.Error as e:
                raise StorageError(f"Cannot connect to Dolt: {e}") from e
        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection and self._connection.is_connected():
            self._connection.close()
            self._connection = None


class DoltRecordStore:
    """
    Dolt implementation of the RecordStore interface.

    Records live as JSON in a single `records` table. Subscribers are
    notified of writes made through this instance only.
    """

    def __init__(self, connection: DoltConnection) -> None:
        self._conn = connection
        self._subscribers: list[ChangeCallback] = []

    def _execute(
        self,
        query: str,
        params: tuple[Any, ...] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a query and return results as list of dicts."""
        conn = self._conn.get_connection()
        cursor: MySQLCursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(query, params or ())
            results = cursor.fetchall()
            return [dict(row) for row in results]  # type: ignore[arg-type]
        except mysql.connector.Error as e:
            raise StorageError(f"Dolt query failed: {e}") from e
        finally:
            cursor.close()

    def _execute_write(self, query: str, params: tuple[Any, ...] | None = None) -> int:
        """Execute a write and return the number of affected rows."""
        conn = self._conn.get_connection()
        cursor: MySQLCursor = conn.cursor(dictionary=True)
        try:
            cursor.execute(query, params or ())
            return cursor.rowcount
        except mysql.connector.Error as e:
            raise StorageError(f"Dolt query failed: {e}") from e
        finally:
            cursor.close()

    def _execute_proc(self, proc_name: str, args: tuple[Any, ...] = ()) -> None:
        """Execute a Dolt stored procedure."""
        conn = self._conn.get_connection()
        cursor: MySQLCursor = conn.cursor(dictionary=True)
        try:
            cursor.callproc(proc_name, args)
        except mysql.connector.Error as e:
            raise StorageError(f"Dolt procedure {proc_name} failed: {e}") from e
        finally:
            cursor.close()

    def _commit(self, message: str) -> None:
        self._execute_proc("dolt_commit", ("-Am", message, "--allow-empty"))

    # =========================================================================
    # Record Operations
    # =========================================================================

    def get(self, key: str) -> Record | None:
        """Get a record by key, or None if absent."""
        result = self._execute("SELECT body FROM records WHERE record_key = %s", (key,))
        if not result:
            return None
        body = result[0]["body"]
        return json.loads(body) if isinstance(body, str | bytes) else body

    def put(self, key: str, record: Record) -> None:
        """Insert or replace a record."""
        query = """
            INSERT INTO records (record_key, body, updated_at)
            VALUES (%s, %s, NOW())
            ON DUPLICATE KEY UPDATE
                body = VALUES(body),
                updated_at = VALUES(updated_at)
        """
        self._execute_write(query, (key, json.dumps(record)))
        self._commit(f"Save {key}")
        logger.debug("Saved record %s", key)
        self._notify(key, record)

    def delete(self, key: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        # Only the caller whose DELETE removed the row sees True
        if self._execute_write("DELETE FROM records WHERE record_key = %s", (key,)) < 1:
            return False
        self._commit(f"Delete {key}")
        logger.debug("Deleted record %s", key)
        self._notify(key, None)
        return True

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with a prefix, sorted."""
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        result = self._execute(
            "SELECT record_key FROM records WHERE record_key LIKE %s ORDER BY record_key",
            (f"{escaped}%",),
        )
        return [row["record_key"] for row in result]

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, key: str, record: Record | None) -> None:
        for callback in list(self._subscribers):
            callback(key, json.loads(json.dumps(record)) if record is not None else None)


# =============================================================================
# Schema Initialization
# =============================================================================

DOLT_SCHEMA = """
-- Shared records (characters, trades), one JSON document per key
CREATE TABLE IF NOT EXISTS records (
    record_key VARCHAR(255) PRIMARY KEY,
    body JSON NOT NULL,
    updated_at DATETIME NOT NULL
);
"""


def init_dolt_schema(connection: DoltConnection) -> None:
    """Initialize the Dolt database schema."""
    conn = connection.get_connection()
    cursor = conn.cursor()
    try:
        for statement in DOLT_SCHEMA.split(";"):
            statement = statement.strip()
            if statement:
                cursor.execute(statement)
        conn.commit()
    except mysql.connector.Error as e:
        raise StorageError(f"Schema initialization failed: {e}") from e
    finally:
        cursor.close()
