"""Schedule feed parser.

Turns the season schedule document into EventRecord objects:

    {"races": [{"round": 1, "name": "FORMULA 1 ...: Australian Grand Prix 2025",
                "location": "Melbourne", "circuitId": "albert_park",
                "sessions": {"fp1": "2025-03-14T01:30:00Z", ...}}]}

The document shape is checked strictly. Individual races are lenient: a
race with no name or no readable session is dropped, and a single
unreadable session timestamp is kept as None so the rest of the weekend
still renders.
"""

import logging

from paddock.core import EventRecord, MalformedPayload, UnparseableSession
from paddock.utilities.tz import parse_timestamp

logger = logging.getLogger(__name__)


def validate_schedule(payload: dict) -> None:
    """Raise MalformedPayload unless the payload has a races list."""
    races = payload.get("races") if isinstance(payload, dict) else None
    if not isinstance(races, list):
        raise MalformedPayload("Schedule feed has no 'races' list")


def parse_schedule(payload: dict) -> list[EventRecord]:
    """Parse a schedule document.

    Args:
        payload: Decoded schedule JSON

    Returns:
        EventRecords in feed order

    Raises:
        MalformedPayload: if the document has no races list
    """
    validate_schedule(payload)

    events = []
    for index, race in enumerate(payload["races"]):
        event = _parse_race(race, index)
        if event:
            events.append(event)

    logger.debug("[SCHEDULE] Parsed %d of %d races", len(events), len(payload["races"]))
    return events


def _parse_race(race: object, index: int) -> EventRecord | None:
    if not isinstance(race, dict):
        logger.warning("[SCHEDULE] Skipping race #%d: not an object", index)
        return None

    name = race.get("name")
    raw_sessions = race.get("sessions")
    if not name or not isinstance(raw_sessions, dict):
        logger.warning("[SCHEDULE] Skipping race #%d: missing name or sessions", index)
        return None

    sessions = {}
    for key, value in raw_sessions.items():
        parsed = parse_timestamp(value)
        if parsed is None:
            logger.warning("[SCHEDULE] %s in %s", UnparseableSession(key, value), name)
        sessions[key] = parsed

    if not any(ts is not None for ts in sessions.values()):
        logger.warning("[SCHEDULE] Skipping %s: no readable session times", name)
        return None

    try:
        round_number = int(race.get("round") or index + 1)
    except (TypeError, ValueError, OverflowError):
        round_number = index + 1

    circuit_id = race.get("circuitId")
    if circuit_id is not None and not isinstance(circuit_id, str):
        logger.warning("[SCHEDULE] Ignoring circuitId %r in %s", circuit_id, name)
        circuit_id = None

    return EventRecord(
        round=round_number,
        name=str(name),
        location=str(race.get("location") or ""),
        circuit_id=circuit_id or None,
        sessions=sessions,
    )
