"""Database layer."""

from paddock.database.cache_slots import SQLiteCacheStore
from paddock.database.connection import (
    db_factory_for,
    get_connection,
    get_db,
    init_db,
    reset_db,
)
from paddock.database.settings import (
    AllSettings,
    APISettings,
    DisplaySettings,
    FeedSettings,
    get_all_settings,
    get_feed_settings,
    update_display_settings,
    update_feed_settings,
)

__all__ = [
    # Connection
    "db_factory_for",
    "get_connection",
    "get_db",
    "init_db",
    "reset_db",
    # Cache
    "SQLiteCacheStore",
    # Settings
    "AllSettings",
    "APISettings",
    "DisplaySettings",
    "FeedSettings",
    "get_all_settings",
    "get_feed_settings",
    "update_display_settings",
    "update_feed_settings",
]
