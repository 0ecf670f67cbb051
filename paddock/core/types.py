"""Core data types.

Plain dataclasses shared by providers, consumers and the API layer.
Nothing here touches the network, the filesystem or a renderer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Literal

# Session kind that decides whether a race weekend is upcoming
PRIMARY_SESSION = "race"

CacheSource = Literal["cache", "network", "stale", "none"]
StandingsKind = Literal["drivers", "constructors"]


@dataclass(frozen=True)
class CacheSlotConfig:
    """Where a feed comes from, where it is cached and for how long."""

    resource: str
    slot: str
    expiry: timedelta


@dataclass
class CacheEntry:
    """A decoded cache payload with its storage timestamp."""

    payload: dict
    written_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.written_at


@dataclass
class CacheResult:
    """Outcome of a cache-backed fetch.

    Exactly one of payload / error is set. ``source`` tells where the payload
    came from: a fresh cache hit, the network, a stale cache fallback, or
    nowhere.
    """

    payload: dict | None
    source: CacheSource
    error: Exception | None = None
    age: timedelta | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


@dataclass
class EventRecord:
    """A race weekend from the schedule feed.

    Sessions map a session kind (``fp1``, ``qualifying``, ``race`` ...) to an
    aware datetime, or to None when the feed value could not be parsed.
    """

    round: int
    name: str
    location: str
    circuit_id: str | None = None
    sessions: dict[str, datetime | None] = field(default_factory=dict)

    @property
    def primary_time(self) -> datetime | None:
        return self.sessions.get(PRIMARY_SESSION)

    def resolved_sessions(self) -> dict[str, datetime]:
        return {key: ts for key, ts in self.sessions.items() if ts is not None}


@dataclass
class SessionView:
    """One session, ready for display."""

    key: str
    label: str
    day: str
    start: datetime
    date: str
    time: str
    is_past: bool


@dataclass
class DayBucket:
    """Sessions sharing a day bucket, in start order."""

    day: str
    sessions: list[SessionView] = field(default_factory=list)

    @property
    def is_past(self) -> bool:
        # A day is dimmed once its first session has started
        return bool(self.sessions) and self.sessions[0].is_past


@dataclass
class WeekendHeader:
    """Header fields for a race weekend widget."""

    round_label: str
    title: str
    location: str
    date_range: str
    flag_code: str | None
    circuit_key: str


@dataclass
class WeekendView:
    """Everything a schedule widget needs for one race weekend."""

    header: WeekendHeader
    days: list[DayBucket]


@dataclass
class StandingsEntry:
    """A single championship position."""

    rank: int
    points: float
    category_key: str
    code: str
    label: str
    color: str


@dataclass
class StandingsTable:
    """A championship table from the standings feed."""

    kind: StandingsKind
    season: str | None
    round: str
    entries: list[StandingsEntry] = field(default_factory=list)


@dataclass
class StandingsView:
    """A championship table split into display columns."""

    title: str
    subtitle: str
    table: StandingsTable
    columns: list[list[StandingsEntry]]
    compact: bool = False


@dataclass
class WidgetState:
    """What a widget should show: a view, or an error message.

    ``source`` is the cache outcome the view was built from; a 'stale'
    source means the feed refresh failed and older data is shown.
    """

    view: WeekendView | StandingsView | None = None
    error: str | None = None
    source: CacheSource = "none"

    @property
    def ok(self) -> bool:
        return self.view is not None
