"""Fast cache tier for the hash store.

Defines the ``FastCache`` Protocol that any key/value backend must satisfy,
along with two implementations:

1. **SqliteFastCache** (``db_path``): persistent, shared by every process
   that points at the same file.
2. **MemoryFastCache**: volatile, process-local; suitable for tests and
   single-process deployments.

The fast tier is a read optimization only.  The flat hash file remains the
durability source of truth.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Protocol, runtime_checkable

from assetcache.core.hasher import canonical_json_bytes

logger = logging.getLogger(__name__)


@runtime_checkable
class FastCache(Protocol):
    """Protocol for fast key -> mapping cache backends."""

    def read(self, key: str) -> dict[str, str] | None:
        """Return the mapping stored under *key*, or ``None`` if absent."""
        ...

    def write(self, key: str, mapping: dict[str, str]) -> None:
        """Replace the mapping stored under *key*."""
        ...

    def delete(self, key: str) -> None:
        """Remove *key*; a missing key is not an error."""
        ...


class MemoryFastCache:
    """Process-local fast cache backed by a dict."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, str]] = {}

    def read(self, key: str) -> dict[str, str] | None:
        mapping = self._data.get(key)
        return dict(mapping) if mapping is not None else None

    def write(self, key: str, mapping: dict[str, str]) -> None:
        self._data[key] = dict(mapping)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


_CREATE_CACHE = """
CREATE TABLE IF NOT EXISTS fast_cache (
    key        TEXT PRIMARY KEY,
    value      BLOB NOT NULL,
    updated_at TEXT DEFAULT (datetime('now'))
);
"""


class SqliteFastCache:
    """Fast cache persisted in a SQLite database file.

    A database that cannot be opened or queried (locked, corrupt, not a
    SQLite file) behaves as an empty cache: reads miss and writes are
    skipped with a warning.  The flat hash file stays authoritative.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._execute(_CREATE_CACHE)
        except sqlite3.Error as exc:
            logger.warning(
                "Fast cache: cannot initialize %s (%s); continuing without it.",
                self._db_path,
                exc,
            )
        else:
            logger.info("Fast cache: using SQLite database at %s.", self._db_path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self._db_path), check_same_thread=False)

    def _execute(self, sql: str, params: tuple = ()) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(sql, params)
        finally:
            conn.close()

    def read(self, key: str) -> dict[str, str] | None:
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT value FROM fast_cache WHERE key = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.warning("Fast cache: read of %r failed (%s); ignoring it.", key, exc)
            return None
        if row is None:
            return None
        try:
            mapping = json.loads(row[0])
        except ValueError:
            logger.warning("Fast cache: discarding undecodable value for %r.", key)
            return None
        if not isinstance(mapping, dict):
            return None
        return {str(k): str(v) for k, v in mapping.items()}

    def write(self, key: str, mapping: dict[str, str]) -> None:
        try:
            self._execute(
                "INSERT INTO fast_cache (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = datetime('now')",
                (key, canonical_json_bytes(mapping)),
            )
        except sqlite3.Error as exc:
            logger.warning("Fast cache: write of %r failed (%s); skipped.", key, exc)

    def delete(self, key: str) -> None:
        try:
            self._execute("DELETE FROM fast_cache WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            logger.warning("Fast cache: delete of %r failed (%s); skipped.", key, exc)
