"""Pydantic models for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from paddock.consumers.standings import display_label, format_points
from paddock.core import DayBucket, StandingsEntry, StandingsView, WeekendView, WidgetState
from paddock.core.types import CacheSource

# =============================================================================
# Schedule
# =============================================================================


class SessionModel(BaseModel):
    """A single session row."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    day: str
    start: datetime
    date: str
    time: str
    is_past: bool


class DayModel(BaseModel):
    """A day bucket with its sessions."""

    day: str
    is_past: bool
    sessions: list[SessionModel]

    @classmethod
    def from_bucket(cls, bucket: DayBucket) -> "DayModel":
        return cls(
            day=bucket.day,
            is_past=bucket.is_past,
            sessions=[SessionModel.model_validate(s) for s in bucket.sessions],
        )


class WeekendHeaderModel(BaseModel):
    """Header fields for the schedule widget."""

    model_config = ConfigDict(from_attributes=True)

    round_label: str
    title: str
    location: str
    date_range: str
    flag_code: str | None
    circuit_key: str


class ScheduleResponse(BaseModel):
    """Next race weekend, or an error message for an empty state."""

    source: CacheSource
    error: str | None = None
    header: WeekendHeaderModel | None = None
    days: list[DayModel] = []

    @classmethod
    def from_state(cls, state: WidgetState) -> "ScheduleResponse":
        view = state.view
        if not isinstance(view, WeekendView):
            return cls(source=state.source, error=state.error)
        return cls(
            source=state.source,
            header=WeekendHeaderModel.model_validate(view.header),
            days=[DayModel.from_bucket(b) for b in view.days],
        )


# =============================================================================
# Standings
# =============================================================================


class StandingsEntryModel(BaseModel):
    """A championship position with its display label."""

    rank: int
    points: float
    points_label: str
    category_key: str
    code: str
    label: str
    color: str


class StandingsResponse(BaseModel):
    """Championship table split into columns."""

    source: CacheSource
    error: str | None = None
    kind: str | None = None
    title: str | None = None
    subtitle: str | None = None
    round: str | None = None
    columns: list[list[StandingsEntryModel]] = []

    @classmethod
    def from_state(cls, state: WidgetState) -> "StandingsResponse":
        view = state.view
        if not isinstance(view, StandingsView):
            return cls(source=state.source, error=state.error)

        def entry_model(entry: StandingsEntry) -> StandingsEntryModel:
            return StandingsEntryModel(
                rank=entry.rank,
                points=entry.points,
                points_label=format_points(entry.points),
                category_key=entry.category_key,
                code=entry.code,
                label=display_label(entry, view.compact),
                color=entry.color,
            )

        return cls(
            source=state.source,
            kind=view.table.kind,
            title=view.title,
            subtitle=view.subtitle,
            round=view.table.round,
            columns=[[entry_model(e) for e in column] for column in view.columns],
        )


# =============================================================================
# Cache
# =============================================================================


class CacheSlotStatusModel(BaseModel):
    """Freshness of one cache slot."""

    slot: str
    resource: str
    exists: bool
    written_at: datetime | None
    age_seconds: float | None
    expiry_seconds: float
    is_stale: bool


class CacheStatusResponse(BaseModel):
    slots: list[CacheSlotStatusModel]


# =============================================================================
# Settings
# =============================================================================


class FeedSettingsModel(BaseModel):
    """Feed locations and cache expiry."""

    season: str | None = None
    schedule_url: str | None = None
    standings_base_url: str | None = None
    schedule_expiry_hours: float | None = Field(None, gt=0)
    driver_standings_expiry_hours: float | None = Field(None, gt=0)
    constructor_standings_expiry_hours: float | None = Field(None, gt=0)


class DisplaySettingsModel(BaseModel):
    """Display settings."""

    timezone: str | None = None
    include_flag: bool | None = None
