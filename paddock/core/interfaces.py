"""Collaborator protocols.

The fetcher and scheduler only see these interfaces. Concrete stores live in
``paddock.database`` and ``paddock.consumers.cache.stores``; the HTTP feed
client lives in ``paddock.providers.http``.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Key-value store holding one payload per slot.

    Writes fully replace the previous entry and refresh its last-modified
    time. Implementations are not required to be safe for concurrent
    writers; the last write wins.
    """

    def exists(self, slot: str) -> bool: ...

    def read(self, slot: str) -> bytes | None: ...

    def write(self, slot: str, data: bytes) -> None: ...

    def last_modified(self, slot: str) -> datetime | None: ...

    def delete(self, slot: str) -> bool: ...

    def slots(self) -> list[str]: ...


@runtime_checkable
class FeedSource(Protocol):
    """Fetches a JSON document.

    Raises NetworkFailure or MalformedPayload, never returns None.
    """

    def fetch(self, resource: str) -> dict: ...


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock frozen at a given instant. Used by tests and previews."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> None:
        self.instant = self.instant + timedelta(**kwargs)
