"""Consumers - turn fetched feeds into widget view models."""

from paddock.consumers.cache import CachedFetcher, FileCacheStore, SlotStatus
from paddock.consumers.sessions import (
    WEEKDAY_ORDER,
    build_session_views,
    group_and_order,
    group_by_date,
    select_upcoming,
)
from paddock.consumers.standings import display_label, format_points, split_columns
from paddock.consumers.weekend import (
    build_weekend_header,
    build_weekend_view,
    date_range,
    short_title,
)

__all__ = [
    # Cache
    "CachedFetcher",
    "FileCacheStore",
    "SlotStatus",
    # Sessions
    "WEEKDAY_ORDER",
    "build_session_views",
    "group_and_order",
    "group_by_date",
    "select_upcoming",
    # Standings
    "display_label",
    "format_points",
    "split_columns",
    # Weekend
    "build_weekend_header",
    "build_weekend_view",
    "date_range",
    "short_title",
]
