"""Database operations for application settings.

Provides read/update operations for the settings table (singleton row).
Settings are organized into logical groups for easier management.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from sqlite3 import Connection

logger = logging.getLogger(__name__)

DEFAULT_SEASON = "2025"
DEFAULT_SCHEDULE_URL = (
    "https://raw.githubusercontent.com/obegley95/Scriptable/refs/heads/main"
    "/_data/schedule/f1_schedule_{season}.json"
)
DEFAULT_STANDINGS_BASE_URL = "https://api.jolpi.ca/ergast/f1"


@dataclass
class FeedSettings:
    """Feed locations and cache expiry (in hours)."""

    season: str = DEFAULT_SEASON
    schedule_url: str = DEFAULT_SCHEDULE_URL
    standings_base_url: str = DEFAULT_STANDINGS_BASE_URL
    schedule_expiry_hours: float = 6.0
    driver_standings_expiry_hours: float = 3.0
    constructor_standings_expiry_hours: float = 5.0

    @property
    def schedule_expiry(self) -> timedelta:
        return timedelta(hours=self.schedule_expiry_hours)

    @property
    def driver_standings_expiry(self) -> timedelta:
        return timedelta(hours=self.driver_standings_expiry_hours)

    @property
    def constructor_standings_expiry(self) -> timedelta:
        return timedelta(hours=self.constructor_standings_expiry_hours)


@dataclass
class DisplaySettings:
    """Display and formatting settings."""

    timezone: str = "UTC"
    include_flag: bool = True


@dataclass
class APISettings:
    """HTTP behavior settings."""

    timeout: float = 10.0


@dataclass
class AllSettings:
    """Complete application settings."""

    feeds: FeedSettings = field(default_factory=FeedSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    api: APISettings = field(default_factory=APISettings)


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_all_settings(conn: Connection) -> AllSettings:
    """Get all application settings.

    Args:
        conn: Database connection

    Returns:
        AllSettings object with all configuration
    """
    cursor = conn.execute("SELECT * FROM settings WHERE id = 1")
    row = cursor.fetchone()

    if not row:
        return AllSettings()

    return AllSettings(
        feeds=FeedSettings(
            season=row["season"] or DEFAULT_SEASON,
            schedule_url=row["schedule_url"] or DEFAULT_SCHEDULE_URL,
            standings_base_url=row["standings_base_url"] or DEFAULT_STANDINGS_BASE_URL,
            schedule_expiry_hours=row["schedule_expiry_hours"] or 6.0,
            driver_standings_expiry_hours=row["driver_standings_expiry_hours"] or 3.0,
            constructor_standings_expiry_hours=(
                row["constructor_standings_expiry_hours"] or 5.0
            ),
        ),
        display=DisplaySettings(
            timezone=row["display_timezone"] or "UTC",
            include_flag=row["include_flag"] is None or bool(row["include_flag"]),
        ),
        api=APISettings(
            timeout=row["api_timeout"] or 10.0,
        ),
    )


def get_feed_settings(conn: Connection) -> FeedSettings:
    """Get feed settings.

    Args:
        conn: Database connection

    Returns:
        FeedSettings object
    """
    return get_all_settings(conn).feeds


# =============================================================================
# UPDATE OPERATIONS
# =============================================================================


def update_feed_settings(
    conn: Connection,
    season: str | None = None,
    schedule_url: str | None = None,
    standings_base_url: str | None = None,
    schedule_expiry_hours: float | None = None,
    driver_standings_expiry_hours: float | None = None,
    constructor_standings_expiry_hours: float | None = None,
) -> bool:
    """Update feed settings.

    Only updates fields that are explicitly provided.

    Returns:
        True if updated
    """
    updates = []
    values: list = []

    if season is not None:
        updates.append("season = ?")
        values.append(season)
    if schedule_url is not None:
        updates.append("schedule_url = ?")
        values.append(schedule_url)
    if standings_base_url is not None:
        updates.append("standings_base_url = ?")
        values.append(standings_base_url)
    if schedule_expiry_hours is not None:
        updates.append("schedule_expiry_hours = ?")
        values.append(schedule_expiry_hours)
    if driver_standings_expiry_hours is not None:
        updates.append("driver_standings_expiry_hours = ?")
        values.append(driver_standings_expiry_hours)
    if constructor_standings_expiry_hours is not None:
        updates.append("constructor_standings_expiry_hours = ?")
        values.append(constructor_standings_expiry_hours)

    return _apply_updates(conn, updates, values, "Feed")


def update_display_settings(
    conn: Connection,
    timezone: str | None = None,
    include_flag: bool | None = None,
) -> bool:
    """Update display settings.

    Returns:
        True if updated
    """
    updates = []
    values: list = []

    if timezone is not None:
        updates.append("display_timezone = ?")
        values.append(timezone)
    if include_flag is not None:
        updates.append("include_flag = ?")
        values.append(int(include_flag))

    return _apply_updates(conn, updates, values, "Display")


def _apply_updates(conn: Connection, updates: list[str], values: list, group: str) -> bool:
    if not updates:
        return False

    query = f"UPDATE settings SET {', '.join(updates)} WHERE id = 1"
    cursor = conn.execute(query, values)
    if cursor.rowcount > 0:
        logger.info("[UPDATED] %s settings: %s", group, [u.split(" = ")[0] for u in updates])
        return True
    return False
