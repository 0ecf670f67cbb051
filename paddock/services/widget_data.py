"""Widget data service.

Single entry point for widget view models. Each method obtains its feed
through the cache, parses it, and builds a view. Failures never escape:
they come back as a WidgetState with an error message the widget can
display instead of crashing.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from paddock.consumers.cache import CachedFetcher
from paddock.consumers.sessions import select_upcoming
from paddock.consumers.standings import split_columns
from paddock.consumers.weekend import Grouping, build_weekend_view
from paddock.core import (
    CacheSlotConfig,
    Clock,
    FeedSource,
    MalformedPayload,
    NoUpcomingEvent,
    StandingsView,
    SystemClock,
    WidgetState,
)
from paddock.database import AllSettings, SQLiteCacheStore, get_all_settings, get_db
from paddock.providers import (
    FeedClient,
    constructor_standings_url,
    driver_standings_url,
    schedule_url,
)
from paddock.providers.jolpica import (
    parse_constructor_standings,
    parse_driver_standings,
    validate_constructor_standings,
    validate_driver_standings,
)
from paddock.providers.schedule import parse_schedule, validate_schedule
from paddock.services.lookups import Lookup, default_lookup
from paddock.utilities.tz import get_display_tz

logger = logging.getLogger(__name__)

SCHEDULE_SLOT = "f1_schedule"
DRIVER_STANDINGS_SLOT = "driver_standings"
CONSTRUCTOR_STANDINGS_SLOT = "constructor_standings"

NO_RACE_DATA = "No race data available."
NO_UPCOMING_RACE = "No upcoming race sessions found."
NO_STANDINGS_DATA = "No standings data available."

# Constructors widget shows two columns of five
CONSTRUCTOR_COLUMNS = 2
CONSTRUCTOR_PER_COLUMN = 5


class WidgetDataService:
    """Builds schedule and standings view models from cached feeds."""

    def __init__(
        self,
        fetcher: CachedFetcher,
        settings: AllSettings | None = None,
        lookup: Lookup = default_lookup,
        clock: Clock | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or AllSettings()
        self._lookup = lookup
        self._clock = clock or SystemClock()

    @property
    def fetcher(self) -> CachedFetcher:
        return self._fetcher

    # -------------------------------------------------------------------------
    # Cache slots
    # -------------------------------------------------------------------------

    def schedule_slot(self) -> CacheSlotConfig:
        feeds = self._settings.feeds
        return CacheSlotConfig(schedule_url(feeds), SCHEDULE_SLOT, feeds.schedule_expiry)

    def driver_standings_slot(self) -> CacheSlotConfig:
        feeds = self._settings.feeds
        return CacheSlotConfig(
            driver_standings_url(feeds), DRIVER_STANDINGS_SLOT, feeds.driver_standings_expiry
        )

    def constructor_standings_slot(self) -> CacheSlotConfig:
        feeds = self._settings.feeds
        return CacheSlotConfig(
            constructor_standings_url(feeds),
            CONSTRUCTOR_STANDINGS_SLOT,
            feeds.constructor_standings_expiry,
        )

    def slots(self) -> list[CacheSlotConfig]:
        return [
            self.schedule_slot(),
            self.driver_standings_slot(),
            self.constructor_standings_slot(),
        ]

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def next_weekend(
        self,
        now: datetime | None = None,
        grouping: Grouping = "weekday",
    ) -> WidgetState:
        """Schedule view for the next race weekend."""
        now = now or self._clock.now()
        result = self._fetcher.obtain(self.schedule_slot(), now, validate=validate_schedule)
        if not result.ok:
            return WidgetState(error=NO_RACE_DATA)

        try:
            events = parse_schedule(result.payload)
        except MalformedPayload as e:
            logger.error("[SCHEDULE] Cached schedule unusable: %s", e)
            return WidgetState(error=NO_RACE_DATA, source=result.source)
        if not events:
            return WidgetState(error=NO_RACE_DATA, source=result.source)

        event = select_upcoming(events, now)
        if event is None:
            logger.info("[SCHEDULE] %s", NoUpcomingEvent("All races are in the past"))
            return WidgetState(error=NO_UPCOMING_RACE, source=result.source)

        display = self._settings.display
        view = build_weekend_view(
            event,
            now,
            tz=get_display_tz(display.timezone),
            lookup=self._lookup,
            grouping=grouping,
            include_flag=display.include_flag,
        )
        return WidgetState(view=view, source=result.source)

    def driver_standings(self, now: datetime | None = None) -> WidgetState:
        """Drivers' championship grid."""
        now = now or self._clock.now()
        result = self._fetcher.obtain(
            self.driver_standings_slot(), now, validate=validate_driver_standings
        )
        if not result.ok:
            return WidgetState(error=NO_STANDINGS_DATA)

        try:
            table = parse_driver_standings(result.payload, self._lookup)
        except MalformedPayload as e:
            logger.error("[STANDINGS] Cached driver standings unusable: %s", e)
            return WidgetState(error=NO_STANDINGS_DATA, source=result.source)

        season = table.season or self._settings.feeds.season
        view = StandingsView(
            title=f"{season} Driver Standings - R{table.round}",
            subtitle=f"Round {table.round}",
            table=table,
            columns=split_columns(table.entries),
        )
        return WidgetState(view=view, source=result.source)

    def constructor_standings(
        self,
        now: datetime | None = None,
        compact: bool = False,
    ) -> WidgetState:
        """Constructors' championship, top ten in two columns.

        Args:
            now: Reference instant
            compact: Use team shorthands (small widget) instead of names
        """
        now = now or self._clock.now()
        result = self._fetcher.obtain(
            self.constructor_standings_slot(), now, validate=validate_constructor_standings
        )
        if not result.ok:
            return WidgetState(error=NO_STANDINGS_DATA)

        try:
            table = parse_constructor_standings(result.payload, self._lookup)
        except MalformedPayload as e:
            logger.error("[STANDINGS] Cached constructor standings unusable: %s", e)
            return WidgetState(error=NO_STANDINGS_DATA, source=result.source)

        view = StandingsView(
            title="WCC Standings",
            subtitle=f"Round {table.round}",
            table=table,
            columns=split_columns(
                table.entries,
                per_column=CONSTRUCTOR_PER_COLUMN,
                max_columns=CONSTRUCTOR_COLUMNS,
            ),
            compact=compact,
        )
        return WidgetState(view=view, source=result.source)


def create_widget_service(
    db_factory: Callable = get_db,
    source: FeedSource | None = None,
    clock: Clock | None = None,
    lookup: Lookup = default_lookup,
) -> WidgetDataService:
    """Wire a WidgetDataService against the SQLite cache and live feeds.

    Args:
        db_factory: get_db-compatible connection factory
        source: Feed source override (defaults to an httpx FeedClient)
        clock: Clock override
        lookup: Lookup tables override
    """
    with db_factory() as conn:
        settings = get_all_settings(conn)

    clock = clock or SystemClock()
    store = SQLiteCacheStore(db_factory, clock)
    source = source or FeedClient(timeout=settings.api.timeout)
    fetcher = CachedFetcher(store, source, clock)
    return WidgetDataService(fetcher, settings, lookup, clock)
