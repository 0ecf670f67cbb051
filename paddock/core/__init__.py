"""Core types and interfaces."""

from paddock.core.errors import (
    FetchError,
    MalformedPayload,
    NetworkFailure,
    NoDataAvailable,
    NoUpcomingEvent,
    PaddockError,
    UnparseableSession,
)
from paddock.core.interfaces import CacheStore, Clock, FeedSource, FixedClock, SystemClock
from paddock.core.types import (
    PRIMARY_SESSION,
    CacheEntry,
    CacheResult,
    CacheSlotConfig,
    DayBucket,
    EventRecord,
    SessionView,
    StandingsEntry,
    StandingsTable,
    StandingsView,
    WeekendHeader,
    WeekendView,
    WidgetState,
)

__all__ = [
    "PRIMARY_SESSION",
    "CacheEntry",
    "CacheResult",
    "CacheSlotConfig",
    "CacheStore",
    "Clock",
    "DayBucket",
    "EventRecord",
    "FeedSource",
    "FetchError",
    "FixedClock",
    "MalformedPayload",
    "NetworkFailure",
    "NoDataAvailable",
    "NoUpcomingEvent",
    "PaddockError",
    "SessionView",
    "StandingsEntry",
    "StandingsTable",
    "StandingsView",
    "SystemClock",
    "UnparseableSession",
    "WeekendHeader",
    "WeekendView",
    "WidgetState",
]
