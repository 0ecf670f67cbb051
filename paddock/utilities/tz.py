"""Timezone utilities.

Single source of truth for timestamp parsing and display formatting.
All session dates and times shown in a widget go through these functions.
"""

import logging
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

# English names, independent of the process locale
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "MONTH_NAMES",
    "WEEKDAY_NAMES",
    "get_display_tz",
    "is_valid_timezone",
    "now_utc",
    "parse_timestamp",
    "to_display_tz",
    "weekday_short",
    "format_time",
    "format_date_short",
    "format_day_date",
]


def get_display_tz(tz_name: str | None = None) -> tzinfo:
    """Get timezone from string, falling back to UTC.

    Args:
        tz_name: IANA timezone name (e.g., 'Europe/London')

    Returns:
        tzinfo for the timezone
    """
    if tz_name:
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("[TZ] Unknown timezone '%s', using UTC", tz_name)
    return UTC


def is_valid_timezone(tz_name: str) -> bool:
    """Check an IANA timezone name."""
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-ish feed timestamp into an aware datetime.

    Accepts a trailing 'Z' and naive values (assumed UTC). Returns None for
    anything that is not a parseable string.

    Examples:
        >>> parse_timestamp("2025-04-20T17:00:00Z")
        datetime.datetime(2025, 4, 20, 17, 0, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def to_display_tz(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert an aware datetime to the display timezone.

    Args:
        dt: Datetime to convert (must be timezone-aware)
        tz: Target timezone, UTC if omitted

    Returns:
        Datetime in the display timezone
    """
    if dt.tzinfo is None:
        raise ValueError("Cannot convert naive datetime - must be timezone-aware")
    return dt.astimezone(tz or UTC)


def weekday_short(dt: datetime, tz: tzinfo | None = None) -> str:
    """Short English weekday name (e.g., 'Fri')."""
    return WEEKDAY_NAMES[to_display_tz(dt, tz).weekday()]


def format_time(dt: datetime, tz: tzinfo | None = None) -> str:
    """Format time for display (e.g., '03:30 pm')."""
    local_dt = to_display_tz(dt, tz)
    hour = local_dt.hour % 12 or 12
    suffix = "am" if local_dt.hour < 12 else "pm"
    return f"{hour:02d}:{local_dt.minute:02d} {suffix}"


def format_date_short(dt: datetime, tz: tzinfo | None = None) -> str:
    """Format short date for display (e.g., '28 Mar')."""
    local_dt = to_display_tz(dt, tz)
    return f"{local_dt.day} {MONTH_NAMES[local_dt.month - 1]}"


def format_day_date(dt: datetime, tz: tzinfo | None = None) -> str:
    """Format weekday plus date (e.g., 'Fri 28 Mar')."""
    local_dt = to_display_tz(dt, tz)
    return f"{WEEKDAY_NAMES[local_dt.weekday()]} {format_date_short(local_dt, local_dt.tzinfo)}"
