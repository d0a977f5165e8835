"""Key-value store backends for persisted prediction statistics.

Two backends are provided:
- InMemoryKeyValueStore: process-local dictionary, used by default and in tests.
- SQLiteKeyValueStore: a single-table SQLite file that survives restarts.

Backends translate driver failures into `db.exceptions` types so callers only
ever need to handle `StorageError`.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """Dictionary-backed store. Values live only as long as the instance."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        """Initialize the store, optionally seeded with existing values."""
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class SQLiteKeyValueStore:
    """SQLite-backed store holding one row per key.

    A connection is opened per operation, so the store can be shared freely
    between components without keeping a handle open.
    """

    TABLE_NAME: str = "key_value"

    def __init__(self, db_path: Union[str, Path]) -> None:
        """Initialize the store for the SQLite file at db_path.

        Args:
            db_path: Path to the SQLite database file. Created on first write.
        """
        self.db_path = str(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.TABLE_NAME} (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        return conn

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if it is missing.

        Raises:
            StorageReadError: If the database cannot be opened or queried.
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    f"SELECT value FROM {self.TABLE_NAME} WHERE key = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.debug("SQLite read failed for key '%s': %s", key, e)
            raise StorageReadError(f"Failed to read key '{key}': {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value stored under key.

        Raises:
            StorageWriteError: If the database cannot be opened or written.
        """
        try:
            conn = self._connect()
            try:
                conn.execute(
                    f"""
                    INSERT INTO {self.TABLE_NAME} (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.debug("SQLite write failed for key '%s': %s", key, e)
            raise StorageWriteError(f"Failed to write key '{key}': {e}") from e
