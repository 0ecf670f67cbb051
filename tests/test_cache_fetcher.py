"""Tests for the cache-backed fetcher.

Covers the four cache outcomes (fresh hit, refreshed, stale fallback,
nothing at all) plus validation, corrupt slots and slot status.
"""

import json
import sqlite3
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from paddock.consumers.cache import CachedFetcher
from paddock.core import CacheSlotConfig, MalformedPayload, NetworkFailure, NoDataAvailable
from paddock.providers.schedule import validate_schedule

from .conftest import NOW, SCHEDULE_PAYLOAD, ScriptedSource

URL = "https://feeds.example/schedule.json"
SLOT = "f1_schedule"
CONFIG = CacheSlotConfig(URL, SLOT, timedelta(hours=6))

OLD_PAYLOAD = {"races": [], "version": "old"}


def _encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def source():
    return ScriptedSource({URL: SCHEDULE_PAYLOAD})


@pytest.fixture
def fetcher(store, source, clock):
    return CachedFetcher(store, source, clock)


# ---------- Fresh cache ----------


class TestFreshCache:
    """A slot younger than its expiry is served without touching the network."""

    def test_fresh_slot_served_without_fetch(self, fetcher, store, source):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=1))

        result = fetcher.obtain(CONFIG, NOW)

        assert result.ok
        assert result.source == "cache"
        assert result.payload == OLD_PAYLOAD
        assert result.age == timedelta(hours=1)
        assert source.calls == []
        assert store.writes == 0

    def test_zero_age_is_fresh(self, fetcher, store, source):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW)

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "cache"
        assert source.calls == []

    def test_age_equal_to_expiry_is_expired(self, fetcher, store, source):
        """Freshness is strictly age < expiry."""
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=6))

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "network"
        assert source.calls == [URL]

    def test_now_defaults_to_clock(self, fetcher, store, source, clock):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=5))
        assert fetcher.obtain(CONFIG).source == "cache"

        clock.advance(hours=2)
        assert fetcher.obtain(CONFIG).source == "network"


# ---------- Refresh ----------


class TestRefresh:
    """Expired or absent slots trigger exactly one fetch."""

    def test_expired_slot_refreshed_and_overwritten(self, fetcher, store, source):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=7))

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "network"
        assert result.payload == SCHEDULE_PAYLOAD
        assert result.age == timedelta(0)
        assert source.calls == [URL]
        assert json.loads(store.read(SLOT)) == SCHEDULE_PAYLOAD
        assert store.last_modified(SLOT) == NOW

    def test_absent_slot_fetched_and_written(self, fetcher, store, source):
        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "network"
        assert source.calls == [URL]
        assert store.exists(SLOT)

    def test_refreshed_slot_served_from_cache_next_time(self, fetcher, store, source):
        fetcher.obtain(CONFIG, NOW)
        result = fetcher.obtain(CONFIG, NOW + timedelta(minutes=30))

        assert result.source == "cache"
        assert source.calls == [URL]

    def test_validator_runs_on_fetched_payload(self, fetcher, source):
        validate = MagicMock()

        fetcher.obtain(CONFIG, NOW, validate=validate)

        validate.assert_called_once_with(SCHEDULE_PAYLOAD)

    def test_validator_not_run_on_fresh_hit(self, fetcher, store):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW)
        validate = MagicMock()

        fetcher.obtain(CONFIG, NOW, validate=validate)

        validate.assert_not_called()


# ---------- Failure fallback ----------


class TestFailureFallback:
    """A failed refresh falls back to the stale copy, or to nothing."""

    def test_network_failure_returns_stale_copy(self, fetcher, store, source):
        source.responses[URL] = NetworkFailure("timeout")
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(days=3))

        result = fetcher.obtain(CONFIG, NOW)

        assert result.ok
        assert result.source == "stale"
        assert result.payload == OLD_PAYLOAD
        assert result.age == timedelta(days=3)
        assert isinstance(result.error, NetworkFailure)
        assert store.writes == 0

    def test_stale_copy_kept_intact(self, fetcher, store, source):
        source.responses[URL] = NetworkFailure("timeout")
        written_at = NOW - timedelta(days=3)
        store.seed(SLOT, _encode(OLD_PAYLOAD), written_at)

        fetcher.obtain(CONFIG, NOW)

        assert json.loads(store.read(SLOT)) == OLD_PAYLOAD
        assert store.last_modified(SLOT) == written_at

    def test_no_cache_and_failure_returns_no_data(self, fetcher, store, source):
        source.responses[URL] = NetworkFailure("offline")

        result = fetcher.obtain(CONFIG, NOW)

        assert not result.ok
        assert result.payload is None
        assert result.source == "none"
        assert isinstance(result.error, NoDataAvailable)
        assert source.calls == [URL]
        assert not store.exists(SLOT)

    def test_no_retry_on_failure(self, fetcher, source):
        source.responses[URL] = NetworkFailure("offline")

        fetcher.obtain(CONFIG, NOW)

        assert len(source.calls) == 1

    def test_malformed_payload_falls_back(self, fetcher, store, source, malformed):
        source.responses[URL] = malformed
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=8))

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "stale"
        assert result.error is malformed

    def test_empty_payload_treated_as_malformed(self, fetcher, store, source):
        source.responses[URL] = {}

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "none"
        assert not store.exists(SLOT)

    def test_validator_rejection_is_not_cached(self, fetcher, store, source):
        source.responses[URL] = {"unexpected": True}

        result = fetcher.obtain(CONFIG, NOW, validate=validate_schedule)

        assert result.source == "none"
        assert isinstance(result.error, NoDataAvailable)
        assert not store.exists(SLOT)

    def test_validator_rejection_serves_stale(self, fetcher, store, source):
        source.responses[URL] = {"unexpected": True}
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=8))

        result = fetcher.obtain(CONFIG, NOW, validate=validate_schedule)

        assert result.source == "stale"
        assert isinstance(result.error, MalformedPayload)

    def test_store_write_failure_without_cache_returns_no_data(self, clock, source):
        store = MagicMock()
        store.exists.return_value = False
        store.write.side_effect = sqlite3.OperationalError("database is locked")
        fetcher = CachedFetcher(store, source, clock)

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "none"
        assert isinstance(result.error, NoDataAvailable)


# ---------- Corrupt slots ----------


class TestCorruptSlot:
    """Unreadable slots count as absent."""

    def test_invalid_json_refetched(self, fetcher, store, source):
        store.seed(SLOT, b"{not json", NOW)

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "network"
        assert source.calls == [URL]

    def test_non_object_payload_refetched(self, fetcher, store, source):
        store.seed(SLOT, b"[1, 2, 3]", NOW)

        assert fetcher.obtain(CONFIG, NOW).source == "network"

    def test_corrupt_slot_and_failure_returns_no_data(self, fetcher, store, source):
        source.responses[URL] = NetworkFailure("offline")
        store.seed(SLOT, b"\xff\xfe", NOW)

        result = fetcher.obtain(CONFIG, NOW)

        assert result.source == "none"

    def test_store_read_error_treated_as_absent(self, clock, source):
        store = MagicMock()
        store.exists.side_effect = OSError("disk gone")
        fetcher = CachedFetcher(store, source, clock)

        assert fetcher.read_entry(SLOT) is None


# ---------- Status / invalidate ----------


class TestSlotStatus:
    def test_absent_slot_is_stale(self, fetcher):
        status = fetcher.status(CONFIG, NOW)

        assert status.exists is False
        assert status.age is None
        assert status.is_stale is True

    def test_fresh_slot(self, fetcher, store):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=2))

        status = fetcher.status(CONFIG, NOW)

        assert status.exists is True
        assert status.age == timedelta(hours=2)
        assert status.is_stale is False

    def test_expired_slot(self, fetcher, store):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW - timedelta(hours=6))

        assert fetcher.status(CONFIG, NOW).is_stale is True

    def test_invalidate_forces_refetch(self, fetcher, store, source):
        store.seed(SLOT, _encode(OLD_PAYLOAD), NOW)

        assert fetcher.invalidate(SLOT) is True
        assert fetcher.invalidate(SLOT) is False
        assert fetcher.obtain(CONFIG, NOW).source == "network"
