"""Cache-backed feed fetching.

Serves a feed from its cache slot while the slot is fresh, refreshes it from
the network once it expires, and falls back to the stale copy when the
refresh fails:

    fresh cache  -> cached payload, no network call
    stale/absent -> one fetch attempt
        success  -> write slot, return fresh payload
        failure  -> stale payload if one was read, else NoDataAvailable

There are no retries and no backoff, and a slot stays in use past its
expiry for as long as the network keeps failing.

Concurrent obtain() calls for the same slot are not synchronized. Both may
miss the cache, both fetch, and the last write wins.
"""

import json
import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from paddock.core import (
    CacheEntry,
    CacheResult,
    CacheSlotConfig,
    CacheStore,
    Clock,
    FeedSource,
    FetchError,
    MalformedPayload,
    NoDataAvailable,
    SystemClock,
)

logger = logging.getLogger(__name__)

Validator = Callable[[dict], None]

# Storage failures are treated like a missing slot (read) or a failed refresh (write)
STORE_ERRORS = (OSError, sqlite3.Error)


@dataclass
class SlotStatus:
    """Freshness of a single cache slot."""

    slot: str
    exists: bool
    written_at: datetime | None
    age: timedelta | None
    is_stale: bool


class CachedFetcher:
    """Obtains feed payloads through a cache slot.

    Usage:
        fetcher = CachedFetcher(SQLiteCacheStore(), FeedClient())
        result = fetcher.obtain(
            CacheSlotConfig(url, "driver_standings", timedelta(hours=3)),
            validate=validate_driver_standings,
        )
        if result.ok:
            render(result.payload)
    """

    def __init__(
        self,
        store: CacheStore,
        source: FeedSource,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._source = source
        self._clock = clock or SystemClock()

    def read_entry(self, slot: str) -> CacheEntry | None:
        """Read and decode a slot. Undecodable entries count as absent."""
        try:
            if not self._store.exists(slot):
                return None
            raw = self._store.read(slot)
            written_at = self._store.last_modified(slot)
        except STORE_ERRORS as e:
            logger.warning("[CACHE] Could not read slot %s: %s", slot, e)
            return None

        if raw is None or written_at is None:
            return None

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("[CACHE] Ignoring unreadable slot %s: %s", slot, e)
            return None
        if not isinstance(payload, dict):
            logger.warning("[CACHE] Ignoring slot %s: payload is not an object", slot)
            return None

        return CacheEntry(payload=payload, written_at=written_at)

    def obtain(
        self,
        config: CacheSlotConfig,
        now: datetime | None = None,
        validate: Validator | None = None,
    ) -> CacheResult:
        """Return the slot's payload, refreshing it if expired.

        Never raises for network, payload or storage problems; the result
        carries either a payload or a NoDataAvailable error.

        Args:
            config: Feed URL, slot name and expiry
            now: Reference instant (defaults to the injected clock)
            validate: Optional shape check raising MalformedPayload

        Returns:
            CacheResult with source 'cache', 'network', 'stale' or 'none'
        """
        now = now or self._clock.now()
        cached = self.read_entry(config.slot)

        if cached is not None:
            age = cached.age(now)
            if age < config.expiry:
                logger.debug("[CACHE] Using cached %s (age %s)", config.slot, age)
                return CacheResult(cached.payload, "cache", age=age)
            logger.info("[CACHE] %s expired (age %s), fetching new data", config.slot, age)
        else:
            logger.info("[CACHE] No cache for %s, fetching new data", config.slot)

        try:
            payload = self._source.fetch(config.resource)
            if not isinstance(payload, dict) or not payload:
                raise MalformedPayload(f"Empty response for {config.slot}")
            if validate:
                validate(payload)
            self._store.write(config.slot, json.dumps(payload).encode("utf-8"))
        except (FetchError, *STORE_ERRORS) as e:
            logger.warning("[CACHE] Refresh of %s failed: %s", config.slot, e)
            if cached is not None:
                logger.info("[CACHE] Using stale %s due to fetch failure", config.slot)
                return CacheResult(cached.payload, "stale", error=e, age=cached.age(now))
            logger.error("[CACHE] No data available for %s", config.slot)
            return CacheResult(None, "none", error=NoDataAvailable(str(e)))

        logger.info("[CACHE] Fetched %s and cached", config.slot)
        return CacheResult(payload, "network", age=timedelta(0))

    def status(self, config: CacheSlotConfig, now: datetime | None = None) -> SlotStatus:
        """Describe a slot's freshness without fetching."""
        now = now or self._clock.now()
        written_at = self._store.last_modified(config.slot)
        if written_at is None:
            return SlotStatus(config.slot, False, None, None, True)
        age = now - written_at
        return SlotStatus(config.slot, True, written_at, age, age >= config.expiry)

    def invalidate(self, slot: str) -> bool:
        """Drop a slot so the next obtain() fetches."""
        removed = self._store.delete(slot)
        if removed:
            logger.info("[CACHE] Invalidated %s", slot)
        return removed
