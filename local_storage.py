"""
local_storage.py
Synchronous key-value storage for the serialized groups and notes blobs.

Two implementations share the same small surface (load/save/keys/remove):
- SqliteLocalStorage: durable, one row per key in a single-table SQLite file
- MemoryLocalStorage: dict-backed, for tests and throwaway sessions

Failures of the backing store are raised as PersistenceError.
"""

import os
import sqlite3
from typing import Dict, List, Optional

import structlog

from errors import PersistenceError

logger = structlog.get_logger(__name__)

SCHEMA_VERSION = 1


class MemoryLocalStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def save(self, key: str, blob: str) -> None:
        self._items[key] = blob

    def keys(self) -> List[str]:
        return list(self._items)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class SqliteLocalStorage:
    """Key-value storage in a SQLite file.

    A connection is opened per call, the same way the rest of the app talks
    to SQLite; calls are infrequent (one per user action) and the file stays
    consistent if the process is killed between them.
    """

    def __init__(self, db_path: str):
        self.db_path = os.path.abspath(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _ensure_schema(self):
        try:
            parent = os.path.dirname(self.db_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute(
                    "CREATE TABLE IF NOT EXISTS local_storage (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
                cur.execute("PRAGMA user_version")
                version = cur.fetchone()[0]
                if version < SCHEMA_VERSION:
                    cur.execute(f"PRAGMA user_version = {int(SCHEMA_VERSION)}")
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Could not open local storage at {self.db_path}: {exc}") from exc

    def get_version(self) -> int:
        try:
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute("PRAGMA user_version")
                return int(cur.fetchone()[0])
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not read schema version: {exc}") from exc

    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None.

        A value that is not valid UTF-8 is treated as absent.
        """
        try:
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute("SELECT CAST(value AS BLOB) FROM local_storage WHERE key = ?", (key,))
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not read '{key}': {exc}", key=key) from exc
        if not row or row[0] is None:
            return None
        try:
            return bytes(row[0]).decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("undecodable_blob_ignored", key=key, error=str(exc))
            return None

    def save(self, key: str, blob: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT OR REPLACE INTO local_storage (key, value) VALUES (?, ?)",
                    (key, blob),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not save '{key}': {exc}", key=key) from exc
        logger.debug("blob_saved", key=key, size=len(blob))

    def keys(self) -> List[str]:
        try:
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute("SELECT key FROM local_storage ORDER BY key")
                return [r[0] for r in cur.fetchall()]
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not list keys: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not remove '{key}': {exc}", key=key) from exc
