"""Race weekend view building.

Combines the weekend header (round, title, venue, dates, flag) with the
day-bucketed sessions into a single WeekendView.
"""

import re
from datetime import datetime, tzinfo
from typing import Literal

from paddock.core import PRIMARY_SESSION, EventRecord, WeekendHeader, WeekendView
from paddock.services.lookups import Lookup, default_lookup
from paddock.utilities.tz import format_date_short

from .sessions import group_and_order, group_by_date

DEFAULT_TITLE = "GRAND PRIX"
DEFAULT_CIRCUIT_KEY = "f1"
FIRST_SESSION = "fp1"

_GRAND_PRIX_RE = re.compile(r"grand prix", re.IGNORECASE)
_TRAILING_YEAR_RE = re.compile(r"\s*\d{4}$")

Grouping = Literal["weekday", "date"]


def short_title(name: str) -> str:
    """Shorten a feed race name for a header.

    Examples:
        >>> short_title("FORMULA 1 SAUDI ARABIAN GP 2025: Saudi Arabian Grand Prix 2025")
        'SAUDI ARABIAN GP'
        >>> short_title("Pre-season testing")
        'GRAND PRIX'
    """
    _, sep, tail = name.partition(":")
    tail = tail.strip()
    if not sep or not tail:
        return DEFAULT_TITLE
    title = _GRAND_PRIX_RE.sub("GP", tail).upper()
    return _TRAILING_YEAR_RE.sub("", title) or DEFAULT_TITLE


def date_range(event: EventRecord, tz: tzinfo | None = None) -> str:
    """First practice to race day, e.g. '18 Apr - 20 Apr'.

    Falls back to the earliest / latest readable sessions when practice or
    race times are missing.
    """
    resolved = event.resolved_sessions()
    if not resolved:
        return ""
    start = resolved.get(FIRST_SESSION) or min(resolved.values())
    end = resolved.get(PRIMARY_SESSION) or max(resolved.values())
    return f"{format_date_short(start, tz)} - {format_date_short(end, tz)}"


def build_weekend_header(
    event: EventRecord,
    tz: tzinfo | None = None,
    lookup: Lookup = default_lookup,
    include_flag: bool = True,
) -> WeekendHeader:
    return WeekendHeader(
        round_label=f"{event.round:02d}",
        title=short_title(event.name),
        location=event.location,
        date_range=date_range(event, tz),
        flag_code=lookup.flag_code(event.circuit_id) if include_flag else None,
        circuit_key=event.circuit_id or DEFAULT_CIRCUIT_KEY,
    )


def build_weekend_view(
    event: EventRecord,
    now: datetime,
    tz: tzinfo | None = None,
    lookup: Lookup = default_lookup,
    grouping: Grouping = "weekday",
    include_flag: bool = True,
) -> WeekendView:
    """Build the full schedule view for one race weekend.

    Args:
        event: Selected race weekend
        now: Reference instant for past/upcoming flags
        tz: Display timezone
        lookup: Label and flag tables
        grouping: 'weekday' (small/medium layouts) or 'date' (large layout)
        include_flag: Whether to resolve a flag code for the header
    """
    group = group_by_date if grouping == "date" else group_and_order
    return WeekendView(
        header=build_weekend_header(event, tz, lookup, include_flag),
        days=group(event, now, tz, lookup),
    )
