"""Standings feed parser.

Parses the Ergast-compatible standings documents served by jolpica:

    {"MRData": {"StandingsTable": {"season": "2025", "round": "6",
        "StandingsLists": [{"DriverStandings": [...]}]}}}

Constructor standings use ``ConstructorStandings`` instead. Entries are
never mutated after parsing.

Validation is strict: a document with any unreadable entry is rejected, so
it never reaches the cache. Parsing is lenient: unreadable entries in an
already cached document are skipped with a warning.
"""

import logging
import math

from paddock.core import MalformedPayload, StandingsEntry, StandingsTable
from paddock.services.lookups import Lookup, default_lookup

logger = logging.getLogger(__name__)

DRIVER_LIST_KEY = "DriverStandings"
CONSTRUCTOR_LIST_KEY = "ConstructorStandings"

UNKNOWN_CONSTRUCTOR = "unknown"


def _standings_table(payload: dict) -> dict:
    mrdata = payload.get("MRData") if isinstance(payload, dict) else None
    table = mrdata.get("StandingsTable") if isinstance(mrdata, dict) else None
    if not isinstance(table, dict):
        raise MalformedPayload("Standings feed has no MRData.StandingsTable")
    return table


def _standings_list(payload: dict, list_key: str) -> list:
    lists = _standings_table(payload).get("StandingsLists")
    if not isinstance(lists, list) or not lists or not isinstance(lists[0], dict):
        raise MalformedPayload("Standings feed has no StandingsLists")
    entries = lists[0].get(list_key)
    if not isinstance(entries, list):
        raise MalformedPayload(f"Standings feed has no {list_key}")
    return entries


def _rank(value: object, index: int) -> int:
    try:
        return int(value) or index + 1
    except (TypeError, ValueError, OverflowError):
        return index + 1


def _points(value: object) -> float:
    try:
        points = float(value)
    except (TypeError, ValueError):
        return 0.0
    return points if math.isfinite(points) else 0.0


# =============================================================================
# Entry fields
# =============================================================================


def _object(value: object, name: str, index: int) -> dict:
    """A nested object; missing counts as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedPayload(f"Entry #{index}: {name} is not an object")
    return value


def _text(mapping: dict, key: str, index: int) -> str | None:
    value = mapping.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedPayload(f"Entry #{index}: {key} is not a string")
    return value or None


def _entry(raw: object, index: int) -> dict:
    if not isinstance(raw, dict):
        raise MalformedPayload(f"Entry #{index} is not an object")
    return raw


def _constructor_id(constructor: dict, index: int) -> str:
    return (_text(constructor, "constructorId", index) or UNKNOWN_CONSTRUCTOR).lower()


def _driver_fields(raw: object, index: int) -> tuple[int, float, str, str, str]:
    """Read (rank, points, constructor id, code, label) from a driver entry.

    Raises:
        MalformedPayload: if a nested field has the wrong type
    """
    entry = _entry(raw, index)
    driver = _object(entry.get("Driver"), "Driver", index)

    constructors = entry.get("Constructors")
    if constructors is not None and not isinstance(constructors, list):
        raise MalformedPayload(f"Entry #{index}: Constructors is not a list")
    first = _object(constructors[0] if constructors else None, "Constructors[0]", index)

    code = _text(driver, "code", index)
    full_name = " ".join(
        part
        for part in (_text(driver, "givenName", index), _text(driver, "familyName", index))
        if part
    )
    return (
        _rank(entry.get("position"), index),
        _points(entry.get("points")),
        _constructor_id(first, index),
        code or "N/A",
        full_name or code or "N/A",
    )


def _constructor_fields(raw: object, index: int) -> tuple[int, float, str]:
    """Read (rank, points, constructor id) from a constructor entry."""
    entry = _entry(raw, index)
    constructor = _object(entry.get("Constructor"), "Constructor", index)
    return (
        _rank(entry.get("position"), index),
        _points(entry.get("points")),
        _constructor_id(constructor, index),
    )


# =============================================================================
# Validation
# =============================================================================


def validate_driver_standings(payload: dict) -> None:
    """Raise MalformedPayload unless every driver entry is readable."""
    for index, raw in enumerate(_standings_list(payload, DRIVER_LIST_KEY)):
        _driver_fields(raw, index)


def validate_constructor_standings(payload: dict) -> None:
    """Raise MalformedPayload unless every constructor entry is readable."""
    for index, raw in enumerate(_standings_list(payload, CONSTRUCTOR_LIST_KEY)):
        _constructor_fields(raw, index)


# =============================================================================
# Parsing
# =============================================================================


def parse_driver_standings(
    payload: dict,
    lookup: Lookup = default_lookup,
) -> StandingsTable:
    """Parse a driver standings document.

    Args:
        payload: Decoded standings JSON
        lookup: Team colour/name lookup

    Returns:
        StandingsTable with one entry per readable driver, colour from the
        driver's current constructor

    Raises:
        MalformedPayload: if the document shape is wrong
    """
    raw_entries = _standings_list(payload, DRIVER_LIST_KEY)
    table = _standings_table(payload)

    entries = []
    for index, raw in enumerate(raw_entries):
        try:
            rank, points, constructor_id, code, label = _driver_fields(raw, index)
        except MalformedPayload as e:
            logger.warning("[STANDINGS] Skipping driver: %s", e)
            continue
        entries.append(
            StandingsEntry(
                rank=rank,
                points=points,
                category_key=constructor_id,
                code=code,
                label=label,
                color=lookup.team_color(constructor_id),
            )
        )

    return StandingsTable(
        kind="drivers",
        season=_season(table),
        round=str(table.get("round") or "N/A"),
        entries=entries,
    )


def parse_constructor_standings(
    payload: dict,
    lookup: Lookup = default_lookup,
) -> StandingsTable:
    """Parse a constructor standings document.

    Raises:
        MalformedPayload: if the document shape is wrong
    """
    raw_entries = _standings_list(payload, CONSTRUCTOR_LIST_KEY)
    table = _standings_table(payload)

    entries = []
    for index, raw in enumerate(raw_entries):
        try:
            rank, points, constructor_id = _constructor_fields(raw, index)
        except MalformedPayload as e:
            logger.warning("[STANDINGS] Skipping constructor: %s", e)
            continue
        entries.append(
            StandingsEntry(
                rank=rank,
                points=points,
                category_key=constructor_id,
                code=lookup.team_shorthand(constructor_id),
                label=lookup.team_name(constructor_id),
                color=lookup.team_color(constructor_id),
            )
        )

    return StandingsTable(
        kind="constructors",
        season=_season(table),
        round=str(table.get("round") or "N/A"),
        entries=entries,
    )


def _season(table: dict) -> str | None:
    season = table.get("season")
    return str(season) if season else None
