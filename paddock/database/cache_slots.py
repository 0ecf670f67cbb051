"""SQLite-backed cache slot store.

One row per slot in ``cache_slots``. Every write is an upsert that replaces
the payload and stamps ``written_at`` from the store's clock, so the
last-write time is storage metadata and never part of the payload.

No locking: two processes refreshing the same slot both write and the last
write wins.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from paddock.core.interfaces import Clock, SystemClock
from paddock.database.connection import get_db

logger = logging.getLogger(__name__)


class SQLiteCacheStore:
    """CacheStore implementation over the ``cache_slots`` table."""

    def __init__(self, db_factory: Callable = get_db, clock: Clock | None = None) -> None:
        self._db = db_factory
        self._clock = clock or SystemClock()

    def exists(self, slot: str) -> bool:
        with self._db() as conn:
            cursor = conn.execute("SELECT 1 FROM cache_slots WHERE slot = ?", (slot,))
            return cursor.fetchone() is not None

    def read(self, slot: str) -> bytes | None:
        with self._db() as conn:
            cursor = conn.execute("SELECT payload FROM cache_slots WHERE slot = ?", (slot,))
            row = cursor.fetchone()
        if not row:
            return None
        payload = row["payload"]
        return payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)

    def write(self, slot: str, data: bytes) -> None:
        written_at = self._clock.now().isoformat()
        with self._db() as conn:
            conn.execute(
                """
                INSERT INTO cache_slots (slot, payload, written_at)
                VALUES (?, ?, ?)
                ON CONFLICT(slot) DO UPDATE SET
                    payload = excluded.payload,
                    written_at = excluded.written_at
                """,
                (slot, data, written_at),
            )
        logger.debug("[CACHE] Wrote %d bytes to slot %s", len(data), slot)

    def last_modified(self, slot: str) -> datetime | None:
        with self._db() as conn:
            cursor = conn.execute("SELECT written_at FROM cache_slots WHERE slot = ?", (slot,))
            row = cursor.fetchone()
        if not row:
            return None
        return datetime.fromisoformat(row["written_at"])

    def delete(self, slot: str) -> bool:
        with self._db() as conn:
            cursor = conn.execute("DELETE FROM cache_slots WHERE slot = ?", (slot,))
            return cursor.rowcount > 0

    def slots(self) -> list[str]:
        with self._db() as conn:
            cursor = conn.execute("SELECT slot FROM cache_slots ORDER BY slot")
            return [row["slot"] for row in cursor.fetchall()]
