"""Command-line preview of widget data.

Usage:
    python -m paddock schedule [--group date]
    python -m paddock drivers
    python -m paddock constructors [--compact]
    python -m paddock cache

Prints the same JSON the HTTP API returns. Log level comes from
PADDOCK_LOG_LEVEL (default: WARNING).
"""

import argparse
import logging
import os
import sys

from paddock.api.models import ScheduleResponse, StandingsResponse
from paddock.database import get_db, init_db
from paddock.services.widget_data import create_widget_service


def _setup_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("PADDOCK_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="paddock", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    schedule = sub.add_parser("schedule", help="Next race weekend")
    schedule.add_argument("--group", choices=["weekday", "date"], default="weekday")
    sub.add_parser("drivers", help="Drivers' championship")
    constructors = sub.add_parser("constructors", help="Constructors' championship")
    constructors.add_argument("--compact", action="store_true", help="Use team shorthands")
    sub.add_parser("cache", help="Cache slot freshness")

    args = parser.parse_args(argv)
    _setup_logging()
    init_db()
    service = create_widget_service(get_db)

    if args.command == "schedule":
        state = service.next_weekend(grouping=args.group)
        print(ScheduleResponse.from_state(state).model_dump_json(indent=2))
    elif args.command == "drivers":
        state = service.driver_standings()
        print(StandingsResponse.from_state(state).model_dump_json(indent=2))
    elif args.command == "constructors":
        state = service.constructor_standings(compact=args.compact)
        print(StandingsResponse.from_state(state).model_dump_json(indent=2))
    else:
        for config in service.slots():
            slot_status = service.fetcher.status(config)
            freshness = "stale" if slot_status.is_stale else "fresh"
            age = slot_status.age if slot_status.age is not None else "-"
            print(f"{config.slot:<24} {freshness:<6} age={age}")
        return 0

    return 0 if state.ok else 1


if __name__ == "__main__":
    sys.exit(main())
