"""Feed clients and parsers."""

from paddock.providers.http import FeedClient
from paddock.providers.urls import (
    constructor_standings_url,
    driver_standings_url,
    schedule_url,
)

__all__ = [
    "FeedClient",
    "constructor_standings_url",
    "driver_standings_url",
    "schedule_url",
]
