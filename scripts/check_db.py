#!/usr/bin/env python3
"""
Record store health check and initialization script.

Usage:
    python scripts/check_db.py          # Check connectivity and list records
    python scripts/check_db.py --init   # Create the records table
"""

from __future__ import annotations

import argparse
import sys

from companion.config import CompanionSettings
from companion.db import DoltConnection, DoltRecordStore, StorageError, init_dolt_schema


def check_dolt(settings: CompanionSettings) -> bool:
    """Check Dolt database connectivity."""
    print(f"Checking Dolt at {settings.dolt_host}:{settings.dolt_port}...")

    conn = DoltConnection.from_settings(settings)
    try:
        db_conn = conn.get_connection()
        if db_conn.is_connected():
            print("  Dolt: Connected")
            return True
        print("  Dolt: Connection failed")
        return False
    except StorageError as e:
        print(f"  Dolt: Error - {e}")
        return False
    finally:
        conn.close()


def init_dolt(settings: CompanionSettings) -> bool:
    """Initialize the Dolt schema."""
    print("Initializing Dolt schema...")

    conn = DoltConnection.from_settings(settings)
    try:
        init_dolt_schema(conn)
        print("  Dolt schema initialized")
        return True
    except StorageError as e:
        print(f"  Dolt init error: {e}")
        return False
    finally:
        conn.close()


def count_records(settings: CompanionSettings) -> None:
    """Print how many characters and trades are stored."""
    conn = DoltConnection.from_settings(settings)
    store = DoltRecordStore(conn)
    namespace = settings.record_namespace
    try:
        characters = store.keys(f"{namespace}/characters/")
        trades = store.keys(f"{namespace}/trades/")
        print(f"  Characters: {len(characters)}")
        print(f"  Open trades: {len(trades)}")
    except StorageError as e:
        print(f"  Records unavailable - {e}")
    finally:
        conn.close()


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Check and initialize the companion record store")
    parser.add_argument("--init", action="store_true", help="Initialize the database schema")
    args = parser.parse_args()

    settings = CompanionSettings()

    print("Companion Record Store Check")
    print("=" * 40)

    dolt_ok = check_dolt(settings)

    if args.init and dolt_ok:
        print()
        print("Schema Initialization")
        print("=" * 40)
        dolt_ok = init_dolt(settings)

    if dolt_ok:
        print()
        print("Records")
        print("=" * 40)
        count_records(settings)

    print()
    print("Summary")
    print("=" * 40)
    print(f"  Dolt: {'OK' if dolt_ok else 'FAILED'}")

    return 0 if dolt_ok else 1


if __name__ == "__main__":
    sys.exit(main())
