"""Race weekend session scheduling.

Picks the next race weekend from a schedule and lays its sessions out for
display. Pure functions of (events, reference instant); nothing here is
cached or persisted.

Weekday bucketing:
    Sessions are bucketed by weekday name, not calendar date, and buckets
    are ordered Mon..Sun. A weekend that crosses a month boundary (Fri 31,
    Sun 2) still reads Friday before Sunday. The flip side is that two
    sessions on the same weekday more than a week apart would share a
    bucket. Schedules never span that long, so the weekday grouping is kept
    as is. group_by_date() is the date-keyed alternative.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, tzinfo

from paddock.core import DayBucket, EventRecord, SessionView, UnparseableSession
from paddock.services.lookups import Lookup, default_lookup
from paddock.utilities.tz import (
    WEEKDAY_NAMES,
    format_date_short,
    format_day_date,
    format_time,
    weekday_short,
)

logger = logging.getLogger(__name__)

WEEKDAY_ORDER = list(WEEKDAY_NAMES)


def select_upcoming(events: Iterable[EventRecord], now: datetime) -> EventRecord | None:
    """Select the soonest event whose race is strictly after ``now``.

    Events without a readable race time are ignored. On equal race times
    the first event in input order wins.

    Args:
        events: Events in feed order
        now: Reference instant (timezone-aware)

    Returns:
        The next event, or None when every race is in the past
    """
    upcoming: EventRecord | None = None
    for event in events:
        race_time = event.primary_time
        if race_time is None or race_time <= now:
            continue
        if upcoming is None or race_time < upcoming.primary_time:
            upcoming = event

    if upcoming is None:
        logger.warning("[SCHEDULE] No upcoming race found")
    else:
        logger.debug("[SCHEDULE] Next race: round %s %s", upcoming.round, upcoming.name)
    return upcoming


def build_session_views(
    event: EventRecord,
    now: datetime,
    tz: tzinfo | None = None,
    lookup: Lookup = default_lookup,
) -> list[SessionView]:
    """Build a SessionView for every readable session, in feed order.

    Sessions whose time is missing or unreadable are skipped; the rest of
    the weekend is unaffected.
    """
    views = []
    for key, start in event.sessions.items():
        if start is None:
            logger.debug("[SCHEDULE] Skipping %s", UnparseableSession(key, start))
            continue
        views.append(
            SessionView(
                key=key,
                label=lookup.session_label(key),
                day=weekday_short(start, tz),
                start=start,
                date=format_date_short(start, tz),
                time=format_time(start, tz),
                is_past=start < now,
            )
        )
    return views


def group_and_order(
    event: EventRecord,
    now: datetime,
    tz: tzinfo | None = None,
    lookup: Lookup = default_lookup,
) -> list[DayBucket]:
    """Group an event's sessions into weekday buckets.

    Buckets are ordered Mon..Sun and only weekdays with sessions appear.
    Sessions within a bucket are in ascending start order. Each session is
    flagged past when it starts strictly before ``now``.

    Args:
        event: The race weekend
        now: Reference instant for the past flag
        tz: Display timezone used for the weekday, date and time (UTC if None)
        lookup: Session label table

    Returns:
        Ordered day buckets

    Example:
        fp1 Fri 12:00, qualifying Sat 15:00, race Sun 14:00
        -> [Fri: [Practice 1], Sat: [Qualifying], Sun: [Race]]
    """
    grouped: dict[str, list[SessionView]] = {}
    for view in build_session_views(event, now, tz, lookup):
        grouped.setdefault(view.day, []).append(view)

    buckets = []
    for day in sorted(grouped, key=WEEKDAY_ORDER.index):
        sessions = sorted(grouped[day], key=lambda s: s.start)
        buckets.append(DayBucket(day=day, sessions=sessions))
    return buckets


def group_by_date(
    event: EventRecord,
    now: datetime,
    tz: tzinfo | None = None,
    lookup: Lookup = default_lookup,
) -> list[DayBucket]:
    """Group an event's sessions by calendar date (e.g. 'Fri 28 Mar').

    Used by the large schedule layout. Buckets follow chronological order.
    """
    grouped: dict[str, list[SessionView]] = {}
    views = sorted(build_session_views(event, now, tz, lookup), key=lambda s: s.start)
    for view in views:
        grouped.setdefault(format_day_date(view.start, tz), []).append(view)
    return [DayBucket(day=day, sessions=sessions) for day, sessions in grouped.items()]
