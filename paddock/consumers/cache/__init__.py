"""Cache-backed feed fetching and cache slot stores."""

from .fetcher import CachedFetcher, SlotStatus
from .stores import FileCacheStore

__all__ = ["CachedFetcher", "FileCacheStore", "SlotStatus"]
